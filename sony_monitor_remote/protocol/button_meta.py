#!/usr/bin/env python3

"""
Sony monitor known button, setting and knob names.

This module contains the names the monitor accepts as INFObutton operands,
STATset operands and INFOknob operands, together with a description of each.

There is no protocol implementation here; only metadata about the protocol.
"""
from __future__ import annotations

from ..internal_types import *
from ..exceptions import SonyMonitorError
from .constants import INFO_BUTTON, INFO_KNOB, STATUS_SET

class ButtonMeta:
    """Metadata for a single named operand in a command category"""
    category: str
    """The category token the name is sent with (INFObutton, STATset or INFOknob)."""

    name: str
    """The operand as sent on the wire, e.g. "MENUUP" or "R CONTRAST"."""

    description: Optional[str]

    def __init__(self, category: str, name: str, description: Optional[str]=None):
        self.category = category
        self.name = name
        self.description = description

    def __str__(self) -> str:
        return f"ButtonMeta({self.category} {self.name!r})"

    def __repr__(self) -> str:
        return str(self)

def _I(name: str, description: str) -> ButtonMeta:
    return ButtonMeta(INFO_BUTTON, name, description)

def _S(name: str, description: str) -> ButtonMeta:
    return ButtonMeta(STATUS_SET, name, description)

def _K(name: str, description: str) -> ButtonMeta:
    return ButtonMeta(INFO_KNOB, name, description)

_button_metas: List[ButtonMeta] = [
    _I("MENU", "Menu - show/hide"),
    _I("MENUUP", "Menu - navigate up"),
    _I("MENUDOWN", "Menu - navigate down"),
    _I("MENUENT", "Menu - enter"),
    _I("DELETE", "Delete last digit"),
    *[_I(f"NUM{i}", f"Digit {i}") for i in range(10)],

    _S("POWER", "Power"),
    _S("ASPECT", "Aspect ratio 16:9"),
    _S("MONO", "Monochrome"),
    _S("EXTSYNC", "External sync"),
    _S("HDELAY", "H delay"),
    _S("VDELAY", "V delay"),
    _S("UNDERSCAN", "Underscan"),
    _S("BLUEONLY", "Blue only"),
    _S("RCUTOFF", "Red cutoff"),
    _S("GCUTOFF", "Green cutoff"),
    _S("BCUTOFF", "Blue cutoff"),
    _S("MANPHASE", "Manual phase"),
    _S("MANCHROMA", "Manual chroma"),
    _S("MANBRIGHT", "Manual brightness"),
    _S("MANCONTRAST", "Manual contrast"),

    _K("R PHASE", "Phase knob"),
    _K("R CHROMA", "Chroma knob"),
    _K("R BRIGHTNESS", "Brightness knob"),
    _K("R CONTRAST", "Contrast knob"),
  ]

button_metas: Dict[Tuple[str, str], ButtonMeta] = {}
for _meta in _button_metas:
    _key = (_meta.category, _meta.name)
    assert not _key in button_metas
    button_metas[_key] = _meta

def get_category_names(category: str) -> List[str]:
    """Returns the known operand names for a category, in table order."""
    return [meta.name for meta in _button_metas if meta.category == category]

def name_to_button_meta(category: str, name: str) -> ButtonMeta:
    """Returns the metadata for a named operand in a category.

    Raises SonyMonitorError if the name is not known for that category.
    """
    result = button_metas.get((category, name), None)
    if result is None:
        raise SonyMonitorError(f"Unknown {category} name: {name!r}")
    return result
