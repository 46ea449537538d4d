# ABOUTME: FictionBook (FB2) processor for raw .fb2 files and zipped .fbz containers.
# ABOUTME: Parses the title-info block with lxml and decodes the base64 cover binary.

import base64
from io import BytesIO
from pathlib import Path
from zipfile import ZipFile

from lxml import etree

from kindling.formats.base import ContainerProcessor, FormatReadError
from kindling.storage.filesystem import Filesystem

_ZIP_MAGIC = b"PK\x03\x04"

_TITLE_INFO = "/*[local-name()='FictionBook']/*[local-name()='description']/*[local-name()='title-info']"


class Fb2ReadError(FormatReadError):
    """Raised when an FB2 file cannot be read or parsed."""


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _first_text(nodes: list) -> str | None:
    """Whitespace-normalized text of the first node that has any."""
    for node in nodes:
        text = _normalize_whitespace(" ".join(node.itertext()))
        if text:
            return text
    return None


def _unzip_payload(raw: bytes) -> bytes:
    """Pull the .fb2 document out of a zipped container."""
    with ZipFile(BytesIO(raw), "r") as archive:
        candidates = [name for name in archive.namelist() if not name.endswith("/")]
        fb2_name = next((name for name in candidates if name.lower().endswith(".fb2")), None)
        target = fb2_name or (candidates[0] if candidates else None)
        if not target:
            raise Fb2ReadError("Zipped FB2 container has no readable files")
        return archive.read(target)


def _href(element: etree._Element) -> str | None:
    """The xlink href of an <image>, whatever prefix the document bound it to."""
    for key, value in element.attrib.items():
        if key == "href" or key.endswith("}href"):
            return value
    return None


class Fb2Processor(ContainerProcessor):
    """Processor for FictionBook 2 documents."""

    name = "fb2"
    extensions = frozenset({"fb2", "fbz"})
    read_error = Fb2ReadError

    def _open(self, path: Path, fs: Filesystem) -> etree._Element:
        with fs.open_read(path) as handle:
            raw = handle.read()
        if raw.startswith(_ZIP_MAGIC):
            raw = _unzip_payload(raw)

        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False
        )
        root = etree.fromstring(raw, parser=parser)
        if etree.QName(root).localname != "FictionBook":
            raise Fb2ReadError(f"Root element is <{etree.QName(root).localname}>, not <FictionBook>")
        return root

    def _title(self, container: etree._Element) -> str | None:
        return _first_text(container.xpath(f"{_TITLE_INFO}/*[local-name()='book-title']"))

    def _authors(self, container: etree._Element) -> list[str]:
        names: list[str] = []
        for author in container.xpath(f"{_TITLE_INFO}/*[local-name()='author']"):
            parts = [
                _first_text(author.xpath(f"./*[local-name()='{tag}']"))
                for tag in ("first-name", "middle-name", "last-name")
            ]
            full = " ".join(part for part in parts if part)
            if not full:
                full = _first_text(author.xpath("./*[local-name()='nickname']")) or ""
            if full:
                names.append(full)
        return names

    def _cover(self, container: etree._Element) -> bytes | None:
        images = container.xpath(
            f"{_TITLE_INFO}/*[local-name()='coverpage']/*[local-name()='image']"
        )
        if not images:
            return None

        href = _href(images[0])
        if not href or not href.startswith("#"):
            return None

        binary_id = href[1:]
        for binary in container.xpath("/*/*[local-name()='binary']"):
            if binary.get("id") == binary_id:
                return base64.b64decode("".join((binary.text or "").split()), validate=True)
        return None
