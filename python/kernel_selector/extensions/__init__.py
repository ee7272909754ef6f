"""Per-kernel extension loading."""

from kernel_selector.extensions.loader import ENTRY_POINT, ExtensionLoader, module_name_for

__all__ = ["ENTRY_POINT", "ExtensionLoader", "module_name_for"]
