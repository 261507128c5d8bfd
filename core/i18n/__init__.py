"""
Structured translation tables, one module per UI language.

Each module exposes a ``translations`` dict mapping the English message
(the key) to its translation. The base language (en) has no module.
"""
