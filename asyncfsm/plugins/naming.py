# asyncfsm/plugins/naming.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import re
from typing import Callable

IdentifierMapper = Callable[[str], str]

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def capitalize(word: str) -> str:
    """Upper-case the first letter of ``word`` and lower-case the rest."""
    return word[:1].upper() + word[1:].lower()


def camelize(text: str) -> str:
    """
    Turn a transition name into a camelCase identifier, e.g. ``"go home"`` -> ``"goHome"``.

    Every non-alphanumeric character separates words.
    """
    words = _NON_ALNUM.sub(" ", text).split(" ")
    joined = words[0] + "".join(capitalize(word) for word in words[1:])
    return joined[:1].lower() + joined[1:]
