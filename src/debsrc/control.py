"""Declarative field tables for deb822 control stanzas.

The decoder and encoder here only deal in strings; turning `"1.0-1"` into a Version or a
checksum line into a FileHash is the job of the model consuming the decoded values. Adding a
field to a stanza type is a matter of adding a row to its table.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from debian import deb822

from debsrc.constants import FIELD_STRIP_CHARS
from debsrc.exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """One row of a field table."""

    name: str
    slot: str
    multiple: bool = False
    delim: str | None = None
    required: bool = False

    def split(self, value: str) -> list[str]:
        if self.delim == " ":
            items = value.split()
        else:
            items = value.split(self.delim)
        return [item.strip(FIELD_STRIP_CHARS) for item in items if item.strip(FIELD_STRIP_CHARS)]

    def join(self, items: list[str]) -> str:
        match self.delim:
            case "\n":
                return "".join(f"\n {item}" for item in items)
            case ",":
                return ", ".join(items)
            case _:
                return " ".join(items)


DSC_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("Format", "format"),
    FieldSpec("Source", "source", required=True),
    FieldSpec("Binary", "binaries", multiple=True, delim=","),
    FieldSpec("Architecture", "architectures", multiple=True, delim=" "),
    FieldSpec("Version", "version", required=True),
    FieldSpec("Origin", "origin"),
    FieldSpec("Maintainer", "maintainer", required=True),
    FieldSpec("Uploaders", "uploaders", multiple=True, delim=","),
    FieldSpec("Homepage", "homepage"),
    FieldSpec("Standards-Version", "standards_version"),
    FieldSpec("Build-Depends", "build_depends"),
    FieldSpec("Build-Depends-Arch", "build_depends_arch"),
    FieldSpec("Build-Depends-Indep", "build_depends_indep"),
    FieldSpec("Checksums-Sha1", "checksums_sha1", multiple=True, delim="\n"),
    FieldSpec("Checksums-Sha256", "checksums_sha256", multiple=True, delim="\n"),
    FieldSpec("Files", "files", multiple=True, delim="\n"),
)


def decode_paragraph(paragraph: deb822.Deb822, fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    """Pull the fields of `fields` out of a parsed stanza, keyed by slot name.

    Single-valued fields come back as stripped strings, multi-valued ones as lists of strings.
    Fields absent from the stanza are absent from the result.

    Raises:
        ParseError: if a required field is missing or empty
    """
    values: dict[str, Any] = {}
    for spec in fields:
        if spec.name not in paragraph:
            if spec.required:
                raise ParseError(f"Missing required field {spec.name!r}")
            continue

        # multivalued stanza types (Dsc, Changes) hold checksum fields as lists of dicts
        try:
            raw = paragraph.get_as_string(spec.name)
        except (KeyError, ValueError) as e:
            raise ParseError(f"Malformed field {spec.name!r}: {e}") from e
        if spec.multiple:
            values[spec.slot] = spec.split(raw)
        else:
            value = raw.strip()
            if spec.required and not value:
                raise ParseError(f"Required field {spec.name!r} is empty")
            values[spec.slot] = value
    return values


def encode_paragraph(values: Mapping[str, Any], fields: tuple[FieldSpec, ...]) -> deb822.Deb822:
    """Render slot values back into a stanza, in field table order.

    Items of multi-valued slots and single values are passed through `str()`. Empty optional
    fields are left out.
    """
    paragraph = deb822.Deb822()
    for spec in fields:
        value = values.get(spec.slot)
        if spec.multiple:
            items = [str(item) for item in value or []]
            if items:
                paragraph[spec.name] = spec.join(items)
                continue
        elif value is not None and str(value):
            paragraph[spec.name] = str(value)
            continue

        if spec.required:
            raise ParseError(f"Missing required field {spec.name!r}")
    return paragraph
