# app/utils/html_render.py
import html
import re
from typing import Optional

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")

def render_plain_text_html(text: Optional[str]) -> str:
    """
    將使用者輸入的純文字轉成安全的 HTML
    - 空行分段 -> <p>
    - 段落內換行 -> <br>
    - 所有內容皆經過 escape
    """
    if not text or not text.strip():
        return ""

    paragraphs = []
    for block in _PARAGRAPH_SPLIT.split(text.strip()):
        lines = [html.escape(line.strip()) for line in block.splitlines()]
        paragraphs.append("<p>" + "<br>".join(lines) + "</p>")
    return "\n".join(paragraphs)
