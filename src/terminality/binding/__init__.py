"""OS terminal bindings."""

from terminality.binding.attributes import TerminalAttributes
from terminality.binding.base import TerminalBinding
from terminality.binding.posix import PosixBinding

__all__ = ["PosixBinding", "TerminalAttributes", "TerminalBinding"]
