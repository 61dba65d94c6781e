from glenisp.reader.parser import ParseNode, parse
from glenisp.reader.reader import read, top_level_forms

__all__ = ["ParseNode", "parse", "read", "top_level_forms"]
