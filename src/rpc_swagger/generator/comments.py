"""Turn raw IDL doc comments into plain description strings."""

import re

COMMENT_PATTERN = re.compile(r"//\s*(.*)|/\*([\s\S]*?)\*/")
LINTER_RULE_PATTERN = re.compile(r"\(-- .*? --\)")


def filter_comment(text: str) -> str:
    """Extract comment text, dropping markers and linter directives.

    Line comments (``//``) contribute their text; block comments
    are split into lines with any leading ``*`` removed. Text without any
    comment markers is returned as is.
    """
    if not text:
        return ""

    matches = COMMENT_PATTERN.findall(text)
    if not matches:
        # already plain text
        return LINTER_RULE_PATTERN.sub("", text).strip()

    comments = []
    for line_comment, block_comment in matches:
        if line_comment:
            comments.append(line_comment.strip())
        elif block_comment:
            lines = [line.strip().removeprefix("*").strip() for line in block_comment.split("\n")]
            comments.append("\n".join(lines).strip())

    result = "\n".join(c for c in comments if c)
    result = LINTER_RULE_PATTERN.sub("", result)
    return "\n".join(line.rstrip() for line in result.splitlines()).strip()
