"""Chemical element enumeration.

Elements are stored in atom columns as atomic numbers, so the enumeration is an
``IntEnum`` whose member names are the element symbols in their conventional
capitalization (``Element.C``, ``Element.Cl``).

Example:
    >>> from atomstore.chem.elements import Element
    >>> Element.from_symbol("CL")
    <Element.Cl: 17>
    >>> Element.Fe.atomic_number
    26

"""

from __future__ import annotations

from enum import IntEnum


class Element(IntEnum):
  """Chemical element keyed by atomic number."""

  H = 1
  He = 2
  Li = 3
  Be = 4
  B = 5
  C = 6
  N = 7
  O = 8
  F = 9
  Ne = 10
  Na = 11
  Mg = 12
  Al = 13
  Si = 14
  P = 15
  S = 16
  Cl = 17
  Ar = 18
  K = 19
  Ca = 20
  Sc = 21
  Ti = 22
  V = 23
  Cr = 24
  Mn = 25
  Fe = 26
  Co = 27
  Ni = 28
  Cu = 29
  Zn = 30
  Ga = 31
  Ge = 32
  As = 33
  Se = 34
  Br = 35
  Kr = 36
  Rb = 37
  Sr = 38
  Y = 39
  Zr = 40
  Nb = 41
  Mo = 42
  Tc = 43
  Ru = 44
  Rh = 45
  Pd = 46
  Ag = 47
  Cd = 48
  In = 49
  Sn = 50
  Sb = 51
  Te = 52
  I = 53
  Xe = 54
  Cs = 55
  Ba = 56
  La = 57
  Ce = 58
  Pr = 59
  Nd = 60
  Pm = 61
  Sm = 62
  Eu = 63
  Gd = 64
  Tb = 65
  Dy = 66
  Ho = 67
  Er = 68
  Tm = 69
  Yb = 70
  Lu = 71
  Hf = 72
  Ta = 73
  W = 74
  Re = 75
  Os = 76
  Ir = 77
  Pt = 78
  Au = 79
  Hg = 80
  Tl = 81
  Pb = 82
  Bi = 83
  Po = 84
  At = 85
  Rn = 86
  Fr = 87
  Ra = 88
  Ac = 89
  Th = 90
  Pa = 91
  U = 92
  Np = 93
  Pu = 94
  Am = 95
  Cm = 96
  Bk = 97
  Cf = 98
  Es = 99
  Fm = 100
  Md = 101
  No = 102
  Lr = 103
  Rf = 104
  Db = 105
  Sg = 106
  Bh = 107
  Hs = 108
  Mt = 109
  Ds = 110
  Rg = 111
  Cn = 112
  Nh = 113
  Fl = 114
  Mc = 115
  Lv = 116
  Ts = 117
  Og = 118

  @property
  def symbol(self) -> str:
    """Element symbol, e.g. ``"Cl"``."""
    return self.name

  @property
  def atomic_number(self) -> int:
    """Atomic number of the element."""
    return int(self)

  @classmethod
  def from_symbol(cls, symbol: str) -> Element:
    """Look up an element by symbol, ignoring case and surrounding whitespace.

    Args:
      symbol: Element symbol as found in structure files ("C", "CL", "Fe").

    Returns:
      The matching Element.

    Raises:
      ValueError: If the symbol is not a known element.

    """
    element = _SYMBOL_LOOKUP.get(symbol.strip().upper())
    if element is None:
      msg = f"Unknown element symbol: {symbol!r}"
      raise ValueError(msg)
    return element


_SYMBOL_LOOKUP: dict[str, Element] = {member.name.upper(): member for member in Element}


def as_atomic_number(value: Element | int | str) -> int:
  """Normalize an element given as member, atomic number or symbol to an atomic number."""
  if isinstance(value, str):
    return int(Element.from_symbol(value))
  return int(Element(value))
