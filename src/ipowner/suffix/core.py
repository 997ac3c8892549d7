"""
Core public-suffix matching.

The suffix data is a label tree keyed from the top-level label
inward. An interior node is a dict; a leaf is a bool that is True for
an exception rule ("!www.ck"). The key "*" matches any label the node
does not otherwise know.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from ipowner.errors import DataSourceError


logger = logging.getLogger(__name__)

SuffixTree = dict[str, Union["SuffixTree", bool]]

WILDCARD = "*"
EXCEPTION_PREFIX = "!"


def registrable_domain(host: str, tree: SuffixTree) -> str:
    """Split off the registrable domain of a host name.

    Returns the public suffix plus one label, e.g. ``example.co.uk`` for
    ``www.example.co.uk``. An exception rule ends the suffix one level
    earlier. Labels the tree does not know end the walk.
    """
    labels = host.lower().rstrip(".").split(".")
    matched: list[str] = []
    in_suffix = True
    node: SuffixTree = tree

    for label in reversed(labels):
        if in_suffix:
            matched.append(label)

        entry = node.get(label)
        if isinstance(entry, dict):
            node = entry
            continue
        if entry is not None:
            in_suffix = not entry
            node = {}
            continue

        wildcard = node.get(WILDCARD)
        if isinstance(wildcard, dict):
            node = wildcard
        elif wildcard is not None:
            in_suffix = not wildcard
            node = {}
        else:
            break

    return ".".join(reversed(matched))


def _to_ascii(rule: str) -> str:
    try:
        return ".".join(
            label if label == WILDCARD else label.encode("idna").decode("ascii")
            for label in rule.split(".")
        )
    except UnicodeError:
        return rule


def parse_suffix_rules(text: str) -> list[str]:
    """Extract rules from public_suffix_list.dat content."""
    rules = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("//"):
            continue
        rules.append(line.split()[0].lower())
    return rules


def build_suffix_tree(rules: Iterable[str]) -> SuffixTree:
    """Build a label tree from public-suffix rules."""
    tree: SuffixTree = {}
    for rule in rules:
        exception = rule.startswith(EXCEPTION_PREFIX)
        rule = _to_ascii(rule.lstrip(EXCEPTION_PREFIX).strip("."))
        if not rule:
            continue

        labels = rule.split(".")[::-1]
        node = tree
        for label in labels[:-1]:
            child = node.get(label)
            if not isinstance(child, dict):
                child = {}
                node[label] = child
            node = child

        last = labels[-1]
        if not isinstance(node.get(last), dict):
            node[last] = exception
    return tree


def load_suffix_tree(path: str | Path) -> SuffixTree:
    """Load suffix data from a JSON tree or a public_suffix_list.dat file.

    Raises:
        DataSourceError: if the file is missing, unreadable or holds no rules
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise DataSourceError("public suffix list", str(path), "file not found")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataSourceError("public suffix list", str(path), str(e)) from e

    if path.suffix == ".json":
        try:
            tree = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataSourceError("public suffix list", str(path), f"invalid JSON: {e}") from e
        if not isinstance(tree, dict):
            raise DataSourceError("public suffix list", str(path), "top level is not an object")
    else:
        tree = build_suffix_tree(parse_suffix_rules(text))

    if not tree:
        raise DataSourceError("public suffix list", str(path), "no rules found")

    logger.debug("Loaded %d top-level suffixes from %s", len(tree), path)
    return tree
