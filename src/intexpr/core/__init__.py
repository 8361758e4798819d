"""Core intexpr modules: errors, configuration, expression tree and parser."""
