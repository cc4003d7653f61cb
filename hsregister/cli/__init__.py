"""Command-line surface: option model and prompts."""

from hsregister.cli.options import (
    OPTIONS,
    USAGE_HEADER,
    OptionSpec,
    ParsedOptions,
    ParseSkip,
    UsageError,
    apply_effects,
    parse_amount,
    parse_check_number,
    parse_options,
    usage_text,
)
from hsregister.cli.prompt import confirm_setup

__all__ = [
    "OPTIONS",
    "USAGE_HEADER",
    "OptionSpec",
    "ParsedOptions",
    "ParseSkip",
    "UsageError",
    "apply_effects",
    "confirm_setup",
    "parse_amount",
    "parse_check_number",
    "parse_options",
    "usage_text",
]
