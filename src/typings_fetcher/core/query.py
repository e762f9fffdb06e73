"""Turn a raw ``depQuery`` string into a :class:`DependencySpec`."""

import re
from urllib.parse import unquote

from typings_fetcher.models import DependencySpec

_LEADING_DIGIT = re.compile(r"^\d")


def remove_version(query: str) -> str:
    """Drop everything from the first ``@`` that is not the scope marker."""
    index = query.find("@", 1)
    if index == -1:
        return query
    return query[:index]


def dependency_name(query: str) -> str:
    parts = remove_version(query).split("/")
    name = parts.pop(0)

    if query.startswith("@") and parts:
        name += f"/{parts.pop(0)}"
    # Aliased versions are published as a path segment, e.g. ``name/2.0/sub``.
    if parts and _LEADING_DIGIT.match(parts[0]):
        name += f"/{parts.pop(0)}"

    return name


def parse_dependency_query(query: str) -> DependencySpec:
    at_count = query.count("@")
    if at_count == 0 or (query.startswith("@") and at_count == 1):
        return DependencySpec(name=query)

    # The last `@` separates the version; one at position 0 only marks a scope.
    separator = query.rfind("@")
    name = dependency_name(query)
    version = unquote(query[separator + 1 :])
    return DependencySpec(name=name, version=version or "latest")
