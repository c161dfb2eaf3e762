import re
from typing import Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DOCUMENT_HEADER = (
    "{\\rtf1\\ansi\\ansicpg1252\\deff0\n"
    "{\\fonttbl{\\f0\\froman Times New Roman;}}\n"
    "{\\colortbl;\\red0\\green0\\blue0;}\n"
    "\\margl1440\\margr1440\\margt1440\\margb1440\n"
)

_HEADING_SIZES = {1: 32, 2: 28, 3: 26}  # half-points
_BODY_SIZE = 22

_HEADING = re.compile(r"^\s*(#{1,6})\s+(.*?)\s*#*\s*$")
_BULLET = re.compile(r"^\s*[-*+]\s+(.*)$")
_NUMBERED = re.compile(r"^\s*(\d+)[.)]\s+(.*)$")
_RULE = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"(?<![*\w])\*(?!\s)(.+?)(?<!\s)\*(?![*\w])")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unicode_escape(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        code -= 0x10000
        units = [0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)]
    else:
        units = [code]
    # \uN takes a signed 16-bit value, followed by an ANSI replacement char.
    return "".join(f"\\u{u - 0x10000 if u > 0x7FFF else u}?" for u in units)


def escape_rtf(text: str) -> str:
    out: list[str] = []
    for char in text:
        if char in "\\{}":
            out.append("\\" + char)
        elif char == "\t":
            out.append("\\tab ")
        elif char == "\n":
            out.append("\\line ")
        elif char == "\r":
            continue
        elif ord(char) > 127:
            out.append(_unicode_escape(char))
        else:
            out.append(char)
    return "".join(out)


def _inline(text: str) -> str:
    text = escape_rtf(text)
    text = _BOLD.sub(lambda m: "{\\b " + m.group(1) + "}", text)
    return _ITALIC.sub(lambda m: "{\\i " + m.group(1) + "}", text)


def _strip_markers(text: str) -> str:
    return _BOLD.sub(r"\1", text)


def _markdown_to_rtf(content: str) -> str:
    paragraphs: list[str] = []
    for line in content.replace("\r\n", "\n").split("\n"):
        if not line.strip():
            continue
        if _RULE.match(line):
            paragraphs.append("\\pard\\sa120\\par")
            continue

        heading = _HEADING.match(line)
        if heading:
            size = _HEADING_SIZES.get(len(heading.group(1)), 24)
            text = escape_rtf(_strip_markers(heading.group(2)))
            paragraphs.append(f"\\pard\\sb240\\sa120\\fs{size}{{\\b {text}}}\\par")
            continue

        bullet = _BULLET.match(line)
        if bullet:
            paragraphs.append(
                f"\\pard\\fi-360\\li720\\sa60\\fs{_BODY_SIZE} \\bullet\\tab {_inline(bullet.group(1))}\\par"
            )
            continue

        numbered = _NUMBERED.match(line)
        if numbered:
            number, text = numbered.groups()
            paragraphs.append(
                f"\\pard\\fi-360\\li720\\sa60\\fs{_BODY_SIZE} {number}.\\tab {_inline(text)}\\par"
            )
            continue

        paragraphs.append(f"\\pard\\sa120\\fs{_BODY_SIZE} {_inline(line.strip())}\\par")
    return "\n".join(paragraphs)


def _title_block(title: str, subtitle: Optional[str]) -> str:
    block = f"\\pard\\qc\\f0\\fs36{{\\b {escape_rtf(title)}}}\\par\n"
    if subtitle:
        block += f"\\pard\\qc\\fs24{{\\i {escape_rtf(subtitle)}}}\\par\n"
    return block + "\\pard\\par\n"


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def slugify_filename(title: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE).lower()


def build_rtf(title: str, subtitle: Optional[str], content: str) -> bytes:
    document = _DOCUMENT_HEADER + _title_block(title, subtitle) + _markdown_to_rtf(content) + "\n}"
    return document.encode("ascii")


def build_chapter_rtf(chapter_number: int, chapter_title: str, chapter_subtitle: Optional[str], content: str) -> bytes:
    footer = f"\\pard\\qc\\sb480\\fs20{{\\i End of Chapter {chapter_number}}}\\par\n\\page"
    document = (
        _DOCUMENT_HEADER
        + _title_block(f"Chapter {chapter_number}: {chapter_title}", chapter_subtitle)
        + _markdown_to_rtf(content)
        + "\n"
        + footer
        + "\n}"
    )
    return document.encode("ascii")
