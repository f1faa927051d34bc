"""Class templates, function files and config-file editing."""

from phpgen.template.config_file import ConfigFileEditor, find_sections
from phpgen.template.function import build_function_unit
from phpgen.template.loader import load_unit_from_yaml, unit_from_dict
from phpgen.template.unit import TemplateUnit, create_template

__all__ = [
    "ConfigFileEditor",
    "TemplateUnit",
    "build_function_unit",
    "create_template",
    "find_sections",
    "load_unit_from_yaml",
    "unit_from_dict",
]
