from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

NOTE_MARKER = "???"


def speaker_notes_plugin(md: MarkdownIt):
    """Markdown-it-py plugin that turns lines beginning with `???` into
    `speaker_note` tokens.  The deck parser lifts these out of the slide body
    into the slide's notes; rendered on their own they become
    `<aside class="notes">` elements.
    """

    def _note_block(state: StateBlock, start_line: int, end_line: int, silent: bool):
        # Indented code blocks win over notes
        if state.sCount[start_line] - state.blkIndent >= 4:
            return False

        src = state.src
        line_start = state.bMarks[start_line] + state.tShift[start_line]
        max_pos = state.eMarks[start_line]

        if not src.startswith(NOTE_MARKER, line_start):
            return False

        if silent:
            return True

        token = state.push("speaker_note", "aside", 0)
        token.content = src[line_start + len(NOTE_MARKER):max_pos].strip()
        token.map = [start_line, start_line + 1]
        token.block = True

        state.line = start_line + 1
        return True

    def _render_note(self, tokens, idx, options, env):
        content = md.renderInline(tokens[idx].content)
        return f'<aside class="notes">{content}</aside>\n'

    # Before paragraph so a `???` line also ends a running paragraph
    md.block.ruler.before("paragraph", "speaker_notes", _note_block, {"alt": ["paragraph"]})
    md.add_render_rule("speaker_note", _render_note)
