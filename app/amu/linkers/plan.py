"""Parser for linker plan transcripts.

Stow run with ``-n -v`` prints one line per action on stderr, e.g.::

    LINK: .vimrc => ../dotfiles/vim/.vimrc
    UNLINK: .bashrc
    --- Skipping .zshrc as it already points to ../dotfiles/zsh/.zshrc
    WARNING! stowing vim would cause conflicts:
      * existing target is neither a link nor a directory: .vimrc

Lines that describe no entry (headers, MKDIR, summaries) are ignored.
The parsed list is for counting and display only.
"""

import re

from amu.links.models import LinkAction, LinkOperation

# Trailing annotations such as "(reverts previous action)"
_ANNOTATION = r"(?: \((?:duplicates|reverts) previous action\))?"

_LINK_PATTERN = re.compile(rf"^LINK: (?P<path>.+?) => (?P<detail>.+?){_ANNOTATION}$")
_UNLINK_PATTERN = re.compile(rf"^UNLINK: (?P<path>.+?){_ANNOTATION}$")
_SKIP_PATTERN = re.compile(r"^--- Skipping (?P<path>.+?) as it already points to (?P<detail>.+)$")
_CONFLICT_PATTERN = re.compile(r"^\* (?P<detail>.+)$")
_OVER_EXISTING = re.compile(r"over existing (?:directory |non-directory )?target (?P<path>\S+)")


def parse_plan(transcript: str) -> list[LinkOperation]:
    """Extract per-entry operations from a plan transcript.

    Args:
        transcript: Diagnostic text written by the linker.

    Returns:
        Operations in transcript order.
    """
    operations: list[LinkOperation] = []
    for raw_line in transcript.splitlines():
        operation = _parse_line(raw_line.strip())
        if operation is not None:
            operations.append(operation)
    return operations


def _parse_line(line: str) -> LinkOperation | None:
    """Parse a single stripped transcript line."""
    if not line:
        return None

    match = _LINK_PATTERN.match(line)
    if match:
        return LinkOperation(LinkAction.LINK, match["path"], match["detail"])

    match = _UNLINK_PATTERN.match(line)
    if match:
        return LinkOperation(LinkAction.UNLINK, match["path"])

    match = _SKIP_PATTERN.match(line)
    if match:
        return LinkOperation(LinkAction.SKIP, match["path"], match["detail"])

    match = _CONFLICT_PATTERN.match(line)
    if match:
        detail = match["detail"]
        path = _conflict_path(detail)
        if path:
            return LinkOperation(LinkAction.CONFLICT, path, detail)

    return None


def _conflict_path(detail: str) -> str | None:
    """Find the target-relative path named in a conflict message.

    Handles both "<reason>: <path>" and
    "cannot stow <src> over existing target <path> since ..." forms.
    """
    over = _OVER_EXISTING.search(detail)
    if over:
        return over["path"]
    if ": " in detail:
        path = detail.rsplit(": ", 1)[1].strip()
        # "<path> => <dest>" when stowed to a different package
        return path.split(" => ", 1)[0] or None
    return None
