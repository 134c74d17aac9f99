"""
Bidirectional mapping between namespaced symbol names and relative paths.

    Foo::BarBaz  <->  foo/bar_baz

Both directions are pure string functions: no lookup table, no project state,
no file-system access.
"""

import re

NAMESPACE_SEPARATOR = "::"
PATH_SEPARATOR = "/"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
# Only an underscore before a letter is absorbed; `_2` stays so foo_2 round-trips.
_UNDERSCORE_LETTER = re.compile(r"_([a-z])")


def decamelize(word: str) -> str:
    """FooBar -> foo_bar, HTMLParser -> html_parser."""
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", word)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.lower()


def camelize(word: str) -> str:
    """foo_bar -> FooBar, foo_2 -> Foo_2."""
    if not word:
        return word
    word = _UNDERSCORE_LETTER.sub(lambda m: m.group(1).upper(), word)
    return word[0].upper() + word[1:]


def symbol_to_path(symbol: str) -> str:
    return PATH_SEPARATOR.join(
        decamelize(segment) for segment in symbol.split(NAMESPACE_SEPARATOR)
    )


def path_to_symbol(path: str) -> str:
    return NAMESPACE_SEPARATOR.join(
        camelize(segment) for segment in path.strip(PATH_SEPARATOR).split(PATH_SEPARATOR)
    )
