"""Static chemistry tables: elements, residues and bond templates."""
