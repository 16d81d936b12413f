"""Bond and bond order definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from biotite import structure


class BondOrder(IntEnum):
  """Covalent bond order.

  The integer values are used in the ``(atom1, atom2, order)`` bond array.
  """

  UNKNOWN = 0
  SINGLE = 1
  DOUBLE = 2
  TRIPLE = 3
  QUADRUPLE = 4
  AROMATIC = 5

  @classmethod
  def from_code(cls, code: str) -> BondOrder:
    """Map a CCD-style order code ("SING", "DOUB", "TRIP", "QUAD", "AROM") to a BondOrder.

    Unrecognized codes map to ``UNKNOWN``.
    """
    return _CODE_TO_ORDER.get(code.strip().upper(), cls.UNKNOWN)

  @classmethod
  def from_biotite(cls, bond_type: int) -> BondOrder:
    """Map a Biotite ``BondType`` onto a BondOrder.

    Every aromatic variant maps to ``AROMATIC``; ``ANY`` and coordination bonds
    map to ``UNKNOWN``.
    """
    name = structure.BondType(bond_type).name
    if name.startswith("AROMATIC"):
      return cls.AROMATIC
    return cls.__members__.get(name, cls.UNKNOWN)


_CODE_TO_ORDER: dict[str, BondOrder] = {
  "SING": BondOrder.SINGLE,
  "DOUB": BondOrder.DOUBLE,
  "TRIP": BondOrder.TRIPLE,
  "QUAD": BondOrder.QUADRUPLE,
  "AROM": BondOrder.AROMATIC,
}


@dataclass(frozen=True)
class Bond:
  """A bond between two atoms of one AtomCollection.

  Attributes:
    atom1: Index of the first atom.
    atom2: Index of the second atom.
    order: Bond order.

  """

  atom1: int
  atom2: int
  order: BondOrder = BondOrder.SINGLE
