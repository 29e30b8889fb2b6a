"""QuickLink template parsing and processing."""

from quicklink.analysis.analyzer import analyze
from quicklink.analysis.models import ArgumentInfo, TemplateInfo, ValidationResult
from quicklink.analysis.validator import validate, validate_with_errors
from quicklink.render.modifiers import apply_modifiers, list_supported_modifiers
from quicklink.render.models import ProcessRequest, ProcessResult, RenderPolicy
from quicklink.render.offsets import apply_offset
from quicklink.render.processor import process
from quicklink.templates.attributes import extract_attribute
from quicklink.templates.grammar import parse_placeholder
from quicklink.templates.models import ArgumentOption, ParsedPlaceholder, PlaceholderSpan
from quicklink.templates.options import parse_options
from quicklink.templates.scanner import scan_placeholders

__all__ = [
    "ArgumentInfo",
    "ArgumentOption",
    "ParsedPlaceholder",
    "PlaceholderSpan",
    "ProcessRequest",
    "ProcessResult",
    "RenderPolicy",
    "TemplateInfo",
    "ValidationResult",
    "analyze",
    "apply_modifiers",
    "apply_offset",
    "extract_attribute",
    "list_supported_modifiers",
    "parse_options",
    "parse_placeholder",
    "process",
    "scan_placeholders",
    "validate",
    "validate_with_errors",
]
