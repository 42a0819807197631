"""
Utility functions for value formatting and data validation.
"""

import re
import math
import logging
import pandas as pd

from .config import DEFAULT_VALUE_FORMAT, PERCENT_PLACEHOLDER

logger = logging.getLogger(__name__)

# Digit placeholders, grouping commas and the decimal point of a format code
_NUMBER_PATTERN = re.compile(r'[#0?][#0?,]*(?:\.[#0?]*)?,*|\.[#0?]+,*')
# Literal text markers: "quoted", \escaped, and _x / *x padding directives
_LITERAL_PATTERN = re.compile(r'"([^"]*)"|\\(.)|[_*].')
# Section condition such as [>=1000000] or [<0]
_CONDITION_PATTERN = re.compile(r'\[\s*(<=|>=|<>|<|>|=)\s*(-?\d+(?:\.\d+)?)\s*\]')
# Currency/locale directive such as [$$-409] or [$€-x-euro]
_CURRENCY_PATTERN = re.compile(r'\[\$([^\]-]*)(?:-[^\]]*)?\]')
# Any remaining bracket directive: colours, locales, conditions
_DIRECTIVE_PATTERN = re.compile(r'\[[^\]]*\]')

_COMPARATORS = {
    '<': lambda a, b: a < b,
    '<=': lambda a, b: a <= b,
    '>': lambda a, b: a > b,
    '>=': lambda a, b: a >= b,
    '=': lambda a, b: a == b,
    '<>': lambda a, b: a != b,
}


def _literal_text(fragment):
    """Strip Excel quoting from the literal prefix/suffix of a format code."""
    def _replace(match):
        if match.group(1) is not None:
            return match.group(1)
        if match.group(2) is not None:
            return match.group(2)
        return ''
    return _LITERAL_PATTERN.sub(_replace, fragment)


def _split_sections(code):
    """Split a format code on ``;`` outside quoted text."""
    sections, current, quoted = [], [], False
    for char in code:
        if char == '"':
            quoted = not quoted
        if char == ';' and not quoted:
            sections.append(''.join(current))
            current = []
        else:
            current.append(char)
    sections.append(''.join(current))
    return sections


def _select_section(sections, number):
    """Pick the section for ``number``.

    Returns ``(section, signed)``; ``signed`` is False when the section is
    the dedicated negative section, which carries its own sign markup.
    """
    conditions = [_CONDITION_PATTERN.search(s) for s in sections]
    if any(conditions):
        for section, condition in zip(sections, conditions):
            if condition and _COMPARATORS[condition.group(1)](number, float(condition.group(2))):
                return section, True
        fallback = [s for s, c in zip(sections, conditions) if c is None]
        return (fallback[-1] if fallback else sections[-1]), True

    if number < 0 and len(sections) > 1 and sections[1]:
        return sections[1], False
    if number == 0 and len(sections) > 2 and sections[2]:
        return sections[2], True
    return sections[0], True


def _strip_directives(section):
    section = _CURRENCY_PATTERN.sub(lambda m: f'"{m.group(1)}"', section)
    return _DIRECTIVE_PATTERN.sub('', section)


def format_value(value, value_format=DEFAULT_VALUE_FORMAT):
    """Format a number with an Excel-style format code.

    Supports the subset of codes measures usually carry: grouping
    (``#,##0``), fixed decimals (``0.00``), literal prefixes and suffixes
    (``$#,##0``, ``0.0" units"``), percentages (``0.0%``), thousands
    scaling through trailing commas (``#,##0,"K"``), currency directives
    (``[$$-409]#,##0``) and conditional sections
    (``[>=1000000]0.0,,"M";[>=1000]0.0,"K";0``).  Colour directives such as
    ``[Red]`` are ignored.  Without conditions, the second section formats
    negative numbers and the third formats zero; otherwise negative numbers
    get a leading ``-``.
    """
    if value is None or pd.isna(value):
        return ''

    number = float(value)
    sections = _split_sections(value_format or DEFAULT_VALUE_FORMAT)
    section, signed = _select_section(sections, number)
    code = _strip_directives(section)

    match = _NUMBER_PATTERN.search(code)
    if not match:
        # A pure text code ("General", "@") just shows the raw value
        return str(value)

    prefix = _literal_text(code[:match.start()])
    suffix = _literal_text(code[match.end():])
    number_code = match.group()

    # Trailing commas divide by 1000 each
    stripped = number_code.rstrip(',')
    scale_commas = len(number_code) - len(stripped)
    integer_part, _, decimal_part = stripped.partition('.')

    if '%' in prefix or '%' in suffix:
        number *= 100
    number /= 1000 ** scale_commas

    decimals = len(decimal_part)
    grouping = ',' if ',' in integer_part else ''
    body = f"{abs(number):{grouping}.{decimals}f}"

    negative = signed and number < 0 and float(body.replace(',', '')) != 0
    sign = '-' if negative else ''
    return f"{sign}{prefix}{body}{suffix}"


def format_percent(value, total):
    """Percent of total with two decimals, or a placeholder for a zero total."""
    if not total or not math.isfinite(total) or not math.isfinite(value):
        return PERCENT_PLACEHOLDER
    return f"{value / total * 100:.2f}%"


def validate_columns(df, required_cols):
    """Validate that required columns exist in dataframe"""
    missing = [c for c in required_cols if c not in df.columns]
    if missing:
        logger.warning(f"Missing columns: {missing}")
        return False
    return True
