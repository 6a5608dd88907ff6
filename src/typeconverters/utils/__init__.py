from .auto_importer import AutoImporterMixin
from .registry import RegistryMixin
from .typing_utils import is_assignable, is_union, type_name

__all__ = [
    "AutoImporterMixin",
    "RegistryMixin",
    "is_assignable",
    "is_union",
    "type_name",
]
