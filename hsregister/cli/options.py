"""
Command-Line Option Model

Each recognized flag maps to an effect: a pure function from
Configuration to Configuration. Parsing collects the effects in
command-line order and folds them over the default configuration,
so the last flag wins on conflict (`-D -k 5` is a withdrawal).

Option scanning stops at the first non-option argument or at `--`;
everything from there on is a plain file argument. A value-taking
option always consumes the next token as its value, even one that
starts with a dash (`-d -refund`).

Malformed --amount/--check values do not fail the parse. The option
resolves to "absent" and the skip is reported alongside the result,
unless strict parsing is requested.
"""

import argparse
import re
from dataclasses import dataclass
from decimal import Decimal
from functools import reduce
from typing import Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from hsregister.models.ledger import (
    DEFAULT_CONFIGURATION,
    Account,
    Configuration,
    TransactionKind,
)


USAGE_HEADER = "ic [OPTION...] files..."

Effect = Callable[[Configuration], Configuration]


class UsageError(Exception):
    """The command line could not be parsed. Carries every message."""

    def __init__(self, messages: Sequence[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


# =============================================================================
# VALUE PARSERS
# =============================================================================

# Leading number of a value; anything after it is ignored ("12abc" -> 12).
_NUMBER_PREFIX = re.compile(r"\s*(-?\d+)(\.\d+)?([eE][-+]?\d+)?")


def parse_amount(raw: str) -> Optional[Decimal]:
    """Absolute value of the leading decimal number, or None if there is none."""
    match = _NUMBER_PREFIX.match(raw)
    if match is None:
        return None
    return abs(Decimal("".join(part for part in match.groups() if part)))


def parse_check_number(raw: str) -> Optional[int]:
    """Absolute value of the leading integer, or None if there is none.

    A leading fractional or exponent number ("12.5", "1e3") is not an
    integer and yields None.
    """
    match = _NUMBER_PREFIX.match(raw)
    if match is None or match.group(2) or match.group(3):
        return None
    return abs(int(match.group(1)))


# =============================================================================
# EFFECTS
# =============================================================================

def set_fields(**changes) -> Effect:
    """Effect that overwrites the given configuration fields."""
    def effect(config: Configuration) -> Configuration:
        return config.model_copy(update=changes)
    return effect


def apply_effects(
    effects: Sequence[Effect],
    initial: Configuration = DEFAULT_CONFIGURATION,
) -> Configuration:
    """Fold effects left to right over the initial configuration."""
    return reduce(lambda config, effect: effect(config), effects, initial)


@dataclass(frozen=True)
class OptionSpec:
    """
    One recognized option.

    Flags carry a ready-made `effect`. Options that take a value carry
    a `builder` turning the raw value into (effect, parsed_ok).
    """
    flags: tuple[str, ...]
    help: str
    effect: Optional[Effect] = None
    builder: Optional[Callable[[str], tuple[Effect, bool]]] = None
    metavar: Optional[str] = None
    name: str = ""

    @property
    def takes_value(self) -> bool:
        return self.builder is not None


def _amount_builder(raw: str) -> tuple[Effect, bool]:
    amount = parse_amount(raw)
    return set_fields(amount=amount), amount is not None


def _description_builder(raw: str) -> tuple[Effect, bool]:
    return set_fields(description=raw), True


def _check_builder(raw: str) -> tuple[Effect, bool]:
    check_num = parse_check_number(raw)
    return (
        set_fields(check_num=check_num, kind=TransactionKind.WITHDRAWAL),
        check_num is not None,
    )


OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        flags=("--init", "--initialize"),
        effect=set_fields(initialize=True),
        help="Initialize the database (deletes old, if exists)",
    ),
    OptionSpec(
        flags=("-a", "--amount"),
        builder=_amount_builder,
        metavar="VALUE",
        name="amount",
        help="The amount of money in the transaction (required to make a transaction)",
    ),
    OptionSpec(
        flags=("-C", "--credit"),
        effect=set_fields(account=Account.CREDIT),
        help="Use credit account",
    ),
    OptionSpec(
        flags=("-c", "--checking"),
        effect=set_fields(account=Account.CHECKING),
        help="Use checking account (Default)",
    ),
    OptionSpec(
        flags=("-D", "--deposit"),
        effect=set_fields(kind=TransactionKind.DEPOSIT),
        help="Sets the transaction to be a deposit",
    ),
    OptionSpec(
        flags=("-d", "--description"),
        builder=_description_builder,
        metavar="STRING",
        name="description",
        help="Adds a description to the transaction",
    ),
    OptionSpec(
        flags=("-h", "--help"),
        effect=set_fields(help=True),
        help="Displays this help output",
    ),
    OptionSpec(
        flags=("-k", "--check"),
        builder=_check_builder,
        metavar="VALUE",
        name="check",
        help="Sets the check number used, sets the transaction type to withdrawl",
    ),
    OptionSpec(
        flags=("-s", "--savings"),
        effect=set_fields(account=Account.SAVINGS),
        help="Use savings account",
    ),
    OptionSpec(
        flags=("-V", "--version"),
        effect=set_fields(version=True),
        help="Display Version",
    ),
    OptionSpec(
        flags=("-v", "--view"),
        effect=set_fields(view=True),
        help="Display selected account",
    ),
    OptionSpec(
        flags=("-W", "--withdrawl"),
        effect=set_fields(kind=TransactionKind.WITHDRAWAL),
        help="Sets the transaction to be a withdrawl (Default)",
    ),
)


# =============================================================================
# PARSE RESULT
# =============================================================================

class ParseSkip(BaseModel):
    """A malformed option value that resolved to 'absent'."""
    model_config = ConfigDict(frozen=True)

    option: str
    value: str


class ParsedOptions(BaseModel):
    """Outcome of parsing one command line."""
    model_config = ConfigDict(frozen=True)

    config: Configuration = DEFAULT_CONFIGURATION
    errors: tuple[str, ...] = ()
    skipped: tuple[ParseSkip, ...] = ()
    non_options: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise UsageError(self.errors)


# =============================================================================
# ARGPARSE PLUMBING
# =============================================================================

class _UsageFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = "Usage: "
        return super().add_usage(usage, actions, groups, prefix)


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def error(self, message):
        raise UsageError([message])


class _EffectAction(argparse.Action):
    """Appends the option's effect to namespace.effects, in order."""

    def __init__(self, option_strings, dest, spec: OptionSpec, **kwargs):
        self.spec = spec
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if self.spec.takes_value:
            effect, parsed_ok = self.spec.builder(values)
            if not parsed_ok:
                namespace.skipped.append(ParseSkip(option=self.spec.name, value=values))
        else:
            effect = self.spec.effect
        namespace.effects.append(effect)


def build_parser() -> argparse.ArgumentParser:
    parser = _OptionParser(
        prog="ic",
        usage=USAGE_HEADER,
        add_help=False,
        formatter_class=_UsageFormatter,
    )
    group = parser.add_argument_group("Options")
    for spec in OPTIONS:
        group.add_argument(
            *spec.flags,
            action=_EffectAction,
            spec=spec,
            nargs=None if spec.takes_value else 0,
            metavar=spec.metavar,
            default=argparse.SUPPRESS,
            help=spec.help,
        )
    return parser


def usage_text() -> str:
    """Full usage text, starting with the `Usage: ic ...` banner."""
    return build_parser().format_help()


# =============================================================================
# TOKEN SCAN
# =============================================================================

@dataclass
class _Scan:
    """Result of splitting raw tokens ahead of argparse."""
    tokens: list[str]
    errors: list[str]
    non_options: list[str]


def _long_flag(spec: OptionSpec) -> str:
    return next(flag for flag in spec.flags if flag.startswith("--"))


def _resolve_long(name: str) -> tuple[Optional[OptionSpec], Optional[str]]:
    """Find the option for `--name`, allowing unambiguous prefixes."""
    exact = [spec for spec in OPTIONS if name in spec.flags]
    if exact:
        return exact[0], None
    candidates = [
        spec for spec in OPTIONS
        if any(flag.startswith("--") and flag.startswith(name) for flag in spec.flags)
    ]
    if len(candidates) == 1:
        return candidates[0], None
    if not candidates:
        return None, f"unrecognized option '{name}'"
    choices = ", ".join(_long_flag(spec) for spec in candidates)
    return None, f"option '{name}' is ambiguous; could be one of: {choices}"


def _scan(argv: Sequence[str]) -> _Scan:
    """
    Rewrite raw tokens into a form argparse reads unambiguously.

    Every value-taking option becomes `--long=value` with the value
    taken verbatim from the next token when not attached. Unknown
    options, ambiguous abbreviations and missing values are collected
    as errors rather than stopping the scan. Scanning ends at the
    first non-option token or at `--`.
    """
    short = {
        flag[1]: spec
        for spec in OPTIONS
        for flag in spec.flags
        if not flag.startswith("--")
    }
    scan = _Scan(tokens=[], errors=[], non_options=[])
    i = 0

    while i < len(argv):
        token = argv[i]

        if token == "--":
            scan.non_options.extend(argv[i + 1:])
            break
        if not token.startswith("-") or token == "-":
            scan.non_options.extend(argv[i:])
            break

        if token.startswith("--"):
            name, has_value, value = token.partition("=")
            spec, error = _resolve_long(name)
            if spec is None:
                scan.errors.append(error)
            elif spec.takes_value:
                if not has_value and i + 1 < len(argv):
                    i += 1
                    value, has_value = argv[i], "="
                if has_value:
                    scan.tokens.append(f"{_long_flag(spec)}={value}")
                else:
                    scan.errors.append(f"option '{_long_flag(spec)}' requires an argument")
            elif has_value:
                scan.errors.append(f"option '{_long_flag(spec)}' doesn't allow an argument")
            else:
                scan.tokens.append(_long_flag(spec))
            i += 1
            continue

        # Clustered short flags: -vC, -a5, -vd "text"
        for j in range(1, len(token)):
            letter = token[j]
            spec = short.get(letter)
            if spec is None:
                scan.errors.append(f"unrecognized option '-{letter}'")
                continue
            if not spec.takes_value:
                scan.tokens.append(f"-{letter}")
                continue
            attached = token[j + 1:]
            if attached:
                scan.tokens.append(f"{_long_flag(spec)}={attached}")
            elif i + 1 < len(argv):
                i += 1
                scan.tokens.append(f"{_long_flag(spec)}={argv[i]}")
            else:
                scan.errors.append(f"option requires an argument -- '{letter}'")
            break
        i += 1

    return scan


def parse_options(argv: Sequence[str], strict: bool = False) -> ParsedOptions:
    """
    Parse raw argument tokens into a Configuration.

    Unknown options and missing option values are collected in
    `errors`. With `strict`, malformed --amount/--check values are
    errors too; otherwise they only show up in `skipped`.
    """
    scan = _scan(argv)
    parser = build_parser()
    namespace = argparse.Namespace(effects=[], skipped=[])
    errors = list(scan.errors)

    try:
        parser.parse_args(scan.tokens, namespace=namespace)
    except UsageError as e:
        errors.extend(e.messages)

    if strict:
        errors.extend(
            f"invalid {skip.option} value: '{skip.value}'"
            for skip in namespace.skipped
        )

    return ParsedOptions(
        config=apply_effects(namespace.effects),
        errors=tuple(errors),
        skipped=tuple(namespace.skipped),
        non_options=tuple(scan.non_options),
    )
