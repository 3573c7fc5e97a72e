"""Convert Hugo-flavored Markdown to Mintlify MDX.

The source docs use Hugo shortcodes and raw HTML that MDX either rejects or
renders differently. Conversion is a single forward pass over the document's
lines; each line (or contiguous group of lines) is rewritten by one rule.
"""

from typing import Optional


FRONTMATTER_MARKER = '---'
DESCRIPTION_BLOCK = 'description: |'

DETAILS_OPEN = '<details><summary>'
SUMMARY_CLOSE = '</summary>'
DETAILS_CLOSE = '</details>'

HIGHLIGHT_OPEN = '{{< highlight yaml >}}'
HIGHLIGHT_CLOSE = '{{< /highlight >}}'

MARKDOWNLINT_DISABLE = '<!-- markdownlint-disable -->'

# Tags MDX should keep parsing as markup; everything else in <...> is text
PRESERVED_TAG_PREFIXES = ('a ', 'br', 'Accordion')
PRESERVED_CLOSING_TAGS = ('/a', '/br', '/Accordion')


class MarkdownConverter:
    """Converts Hugo-flavored Markdown documents to Mintlify MDX."""

    def convert(self, content: str) -> str:
        """Convert a whole document and return the MDX text."""
        writes = self.convert_lines(split_lines(content))
        return ''.join(f'{chunk}\n' for chunk in writes)

    def convert_file(self, src_path: str, dst_path: str):
        """Convert ``src_path`` and write the result to ``dst_path``.

        The destination is created before the source is decoded, so a decoding
        error leaves an empty destination file behind.
        """
        with open(src_path, 'r', encoding='utf-8') as src, \
                open(dst_path, 'w', encoding='utf-8') as dst:
            content = src.read()
            dst.write(self.convert(content))

    def convert_lines(self, lines: list[str]) -> list[str]:
        """Rewrite ``lines`` and return the ordered list of output writes.

        An accordion block is returned as a single write that still contains
        its internal newlines.
        """
        output = []
        in_frontmatter = False
        i = 0

        while i < len(lines):
            line = lines[i]

            if line == FRONTMATTER_MARKER:
                in_frontmatter = not in_frontmatter
                output.append(line)
                i += 1
                continue

            if in_frontmatter and line.startswith(DESCRIPTION_BLOCK):
                description, i = self._collect_description(lines, i + 1)
                output.append(description)
                continue

            if DETAILS_OPEN in line:
                end = self._find_details_end(lines, i)
                if end is not None:
                    output.append(self._convert_accordion(lines[i:end + 1]))
                    i = end + 1
                    continue

            converted = self._convert_regular_line(line)
            if converted is not None:
                output.append(converted)
            i += 1

        return output

    # ---- Frontmatter ----

    def _collect_description(self, lines: list[str], start: int) -> tuple[str, int]:
        """Fold an indented ``description: |`` block into one quoted line.

        Returns the folded line and the index of the first unconsumed line.
        """
        parts = []
        i = start
        while i < len(lines) and lines[i] and lines[i][0] in (' ', '\t'):
            parts.append(lines[i].strip())
            i += 1

        description = ' '.join(parts).replace("'", "''")
        return f"description: '{description}'", i

    # ---- Accordions ----

    def _find_details_end(self, lines: list[str], start: int) -> Optional[int]:
        """Return the index of the first line from ``start`` closing the block."""
        for end in range(start, len(lines)):
            if DETAILS_CLOSE in lines[end]:
                return end
        return None

    def _convert_accordion(self, block: list[str]) -> str:
        """Convert a <details> block into an <Accordion> with inline code."""
        text = '\n'.join(block)
        text = text.replace(DETAILS_OPEN, '<Accordion title="', 1)
        text = text.replace(SUMMARY_CLOSE, '">', 1)
        text = text.replace(DETAILS_CLOSE, '</Accordion>', 1)

        text, inline_blocks = _extract_highlights(text)

        # Restore placeholders in order, separating consecutive code samples
        for index, code in enumerate(inline_blocks):
            replacement = code if index == 0 else f'<br />{code}'
            text = text.replace(_placeholder(index), replacement, 1)

        return text.replace('<br>', '<br />')

    # ---- Regular lines ----

    def _convert_regular_line(self, line: str) -> Optional[str]:
        """Apply the per-line rewrites. Returns None if the line is dropped."""
        line = line.replace(HIGHLIGHT_OPEN, '```yaml')
        line = line.replace(HIGHLIGHT_CLOSE, '```')

        line = line.replace('<br>', '<br />')

        if MARKDOWNLINT_DISABLE in line:
            return None

        if line.strip().startswith('#'):
            line = _strip_heading_anchor(line)

        return escape_angle_brackets(line)


def split_lines(content: str) -> list[str]:
    """Split text into lines without a phantom entry for the final newline."""
    if not content:
        return []
    lines = content.replace('\r\n', '\n').split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def escape_angle_brackets(line: str) -> str:
    """Escape placeholder-like <...> spans (e.g. <src-path>) as JSX strings.

    Anchor, line-break and Accordion tags are left for MDX to parse.
    """
    result = []
    i = 0
    while i < len(line):
        if line[i] == '<':
            end = line.find('>', i + 1)
            if end == -1:
                result.append(line[i:])
                break

            content = line[i + 1:end]
            if _is_preserved_tag(content):
                result.append(line[i:end + 1])
            else:
                result.append('{"<"}' + content + '{">"}')
            i = end + 1
            continue

        result.append(line[i])
        i += 1

    return ''.join(result)


def _is_preserved_tag(content: str) -> bool:
    return content.startswith(PRESERVED_TAG_PREFIXES) or content in PRESERVED_CLOSING_TAGS


def _strip_heading_anchor(line: str) -> str:
    """Remove a ``{#custom-id}`` suffix from a heading line."""
    start = line.find('{#')
    if start == -1:
        return line
    end = line.find('}', start + 2)
    if end == -1:
        return line
    return (line[:start] + line[end + 1:]).strip()


def _placeholder(index: int) -> str:
    return f'\x00INLINE{index}\x00'


def _extract_highlights(text: str) -> tuple[str, list[str]]:
    """Pull highlight shortcodes out of ``text`` left to right.

    Each region is replaced by a placeholder; the converted inline code for
    each placeholder is returned in order. An opener without a closer after it
    is left in place.
    """
    inline_blocks = []
    while True:
        start = text.find(HIGHLIGHT_OPEN)
        if start == -1:
            break
        code_start = start + len(HIGHLIGHT_OPEN)
        end = text.find(HIGHLIGHT_CLOSE, code_start)
        if end == -1:
            break

        inline_blocks.append(_to_inline_code(text[code_start:end]))
        text = text[:start] + _placeholder(len(inline_blocks) - 1) + text[end + len(HIGHLIGHT_CLOSE):]

    return text, inline_blocks


def _to_inline_code(code: str) -> str:
    """Collapse a YAML sample into one backticked line safe inside tables."""
    code = code.strip()
    # Literal "\n" keeps table cells on one line
    code = code.replace('\n', '\\n')
    code = code.replace('<', '\\<')
    code = code.replace('>', '\\>')
    code = code.replace('|', '\\|')
    return f'`{code}`'
