import re
from typing import List

from .schema import ACCEPTED_LINK_HOST

LABEL_SEPARATOR = "&"

# "32019-Title" -> "Title"
ID_PREFIX_RE = re.compile(r"^[0-9]+-")
# Full-width or half-width brackets, matched non-greedily: "（71集）", "(old name)"
BRACKET_RE = re.compile(r"[（(].*?[）)]")
# Cast credits trail the title after one of these
CREDIT_SEPARATOR_RE = re.compile(r"[&，,]")
PUNCTUATION_RE = re.compile(r"[！!？?。.]")
# Edge whitespace, including U+FEFF which str.strip() keeps
EDGE_SPACE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def clean_playlet_name(part: str) -> str:
    """Clean one ``&``-separated piece of a composite label.

    The steps run in a fixed order: id prefix, bracket spans, trailing
    credits, then whitespace and punctuation. The result may be empty.
    """
    name = ID_PREFIX_RE.sub("", part, count=1)
    name = BRACKET_RE.sub("", name)
    name = CREDIT_SEPARATOR_RE.split(name, maxsplit=1)[0]
    return PUNCTUATION_RE.sub("", EDGE_SPACE_RE.sub("", name))


def extract_playlet_names(label: str) -> List[str]:
    """
    Turn a composite dataset label into the candidate names it encodes.

    A label such as ``"100-灵异（30集）&张三&李四"`` packs one or more titles,
    an episode count and cast credits into a single field. Each ``&`` piece is
    cleaned on its own and kept in order; pieces that clean down to nothing
    are dropped, so the result may be empty.

    Args:
        label: Composite label from the first dataset column

    Returns:
        Candidate names, duplicates allowed
    """
    names: List[str] = []
    for part in label.split(LABEL_SEPARATOR):
        name = clean_playlet_name(part)
        if name:
            names.append(name)
    return names


def is_accepted_link(link: str) -> bool:
    return ACCEPTED_LINK_HOST in link
