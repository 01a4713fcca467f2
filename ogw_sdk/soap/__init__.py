"""SOAP helpers: template rendering, default envelopes, response extraction."""

from .extractor import extract_fault, extract_field, extract_json_field, extract_xml_field
from .templates import TemplateSet, find_placeholders, render_template

__all__ = [
    "TemplateSet",
    "extract_fault",
    "extract_field",
    "extract_json_field",
    "extract_xml_field",
    "find_placeholders",
    "render_template",
]
