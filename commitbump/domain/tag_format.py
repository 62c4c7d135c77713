"""
Tag format domain object for commitbump.

A tag format is a template such as ``v{version}`` or ``release-{version}-final``
describing where a version number is embedded in a tag name. It is split once
into a literal prefix and suffix which are then used to recognise tag names
and pull the version text back out of them.
"""

from dataclasses import dataclass
from typing import Tuple

from ..exit_codes import InvalidFormatError

VERSION_TOKEN = "{version}"


def split(tag_format: str) -> Tuple[str, str]:
    """
    Split a tag format into its literal prefix and suffix.

    Only the first ``{version}`` counts; anything after it, including a
    second token, is literal suffix text.

    Raises:
        InvalidFormatError: If the format has no ``{version}`` token
    """
    index = tag_format.find(VERSION_TOKEN)
    if index == -1:
        raise InvalidFormatError(
            f"Tag format must contain '{VERSION_TOKEN}': {tag_format!r}"
        )
    return tag_format[:index], tag_format[index + len(VERSION_TOKEN):]


def matches(tag_name: str, prefix: str, suffix: str) -> bool:
    """Check whether a tag name is framed by the given prefix and suffix."""
    if len(prefix) + len(suffix) > len(tag_name):
        return False
    return tag_name.startswith(prefix) and tag_name.endswith(suffix)


def extract_version(tag_name: str, prefix: str, suffix: str) -> str:
    """
    Return the text between prefix and suffix.

    Only valid for names accepted by :func:`matches`.
    """
    if not matches(tag_name, prefix, suffix):
        raise ValueError(
            f"Tag {tag_name!r} does not match prefix {prefix!r} and suffix {suffix!r}"
        )
    return tag_name[len(prefix):len(tag_name) - len(suffix)]


@dataclass(frozen=True)
class TagFormat:
    """
    Parsed tag format.

    Examples:
        TagFormat.parse("v{version}")          -> prefix="v", suffix=""
        TagFormat.parse("{version}")           -> prefix="", suffix=""
        TagFormat.parse("pkg-{version}-final") -> prefix="pkg-", suffix="-final"
    """

    template: str
    prefix: str
    suffix: str

    @classmethod
    def parse(cls, template: str) -> 'TagFormat':
        prefix, suffix = split(template)
        return cls(template=template, prefix=prefix, suffix=suffix)

    def matches(self, tag_name: str) -> bool:
        return matches(tag_name, self.prefix, self.suffix)

    def extract_version(self, tag_name: str) -> str:
        return extract_version(tag_name, self.prefix, self.suffix)

    def format(self, version: str) -> str:
        """Render a tag name for the given version."""
        return f"{self.prefix}{version}{self.suffix}"

    def __str__(self) -> str:
        return self.template
