# watir/locators/xpath_support.py
from __future__ import annotations

"""XPath helpers
----------------
Literal escaping and case folding for XPath 1.0, which has neither string
escapes nor lower-case().
"""

UPPERCASE_ALL = "ABCDEFGHIJKLMNOPQRSTUVWXYZÀÁÂÃÄÅÆÇÈÉÊËÌÍÎÏÐÑÒÓÔÕÖØÙÚÛÜÝÞŸŽŠŒ"
LOWERCASE_ALL = "abcdefghijklmnopqrstuvwxyzàáâãäåæçèéêëìíîïðñòóôõöøùúûüýþÿžšœ"

UPPERCASE_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE_LETTERS = "abcdefghijklmnopqrstuvwxyz"


def escape(value: str) -> str:
    """
    Quote `value` as an XPath string literal.

    - "foo"         → 'foo'
    - "it's a test" → concat('it',"'",'s a test')
    - "'"           → concat('',"'",'')
    """
    if "'" not in value:
        return f"'{value}'"
    parts = [f"'{part}'" for part in value.split("'")]
    return "concat(" + ",\"'\",".join(parts) + ")"


def lower(expr: str) -> str:
    """Case-fold an XPath expression, including common extended Latin letters."""
    return f"translate({expr},'{UPPERCASE_ALL}','{LOWERCASE_ALL}')"


def lower_ascii(expr: str) -> str:
    return f"translate({expr},'{UPPERCASE_LETTERS}','{LOWERCASE_LETTERS}')"


def class_predicate(name: str) -> str:
    """Whitespace-token containment test for one class name; a leading `!` negates it."""
    negate = name.startswith("!")
    if negate:
        name = name[1:]
    expr = f"contains(concat(' ',normalize-space(@class),' '),{escape(' ' + name + ' ')})"
    return f"not({expr})" if negate else expr
