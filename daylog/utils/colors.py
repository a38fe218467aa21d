# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: INLINE COLOR TOKENS
# REQUIREMENTS SATISFIED: optional terminal highlighting inside log messages
"""
daylog/utils/colors.py

Translates inline color tokens in log templates into ANSI escape codes.

A token is "{" followed by one character:

    {0                       reset
    {k {r {g {y {b {m {c {w  normal foreground colors
    {K {R {G {Y {B {M {C {W  bright foreground colors
    {A                       dim (stack trace body)
    {*                       bold

Unknown sequences such as "{x" or a lone "{" are left untouched. Both
functions are pure; the writer picks one depending on whether escape
codes should end up in the file.
"""
import re

_COLOR_LETTERS = "krgybmcw"

COLOR_TOKENS = {"{0": "\033[0m", "{A": "\033[2m", "{*": "\033[1m"}
COLOR_TOKENS.update({"{" + c: f"\033[{30 + i}m" for i, c in enumerate(_COLOR_LETTERS)})
COLOR_TOKENS.update({"{" + c.upper(): f"\033[{90 + i}m" for i, c in enumerate(_COLOR_LETTERS)})

_TOKEN_RE = re.compile("|".join(re.escape(t) for t in COLOR_TOKENS))


def translate_color_tokens(text: str) -> str:
    return _TOKEN_RE.sub(lambda m: COLOR_TOKENS[m.group(0)], text)


def strip_color_tokens(text: str) -> str:
    return _TOKEN_RE.sub("", text)
