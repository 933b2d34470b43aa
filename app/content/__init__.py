"""
Canned demo content.

The agent doesn't analyze anything: every documentation update, code sample,
and gap finding it "produces" is loaded from here once at import time.

- docs/initial/: documentation as it stands before the demo code change
- docs/updates/<change>/: documentation after a given source file changes
- code/: the demo source file before and after the pushed change
- gaps.py: predetermined documentation gap findings
"""

from pathlib import Path

from app.content.gaps import PREDETERMINED_GAPS

CONTENT_DIR = Path(__file__).parent
DOC_FILES = ("getting-started.md", "architecture.md", "how-to-guide.md")

# Source file the demo "trigger" modifies in the product repo
DEMO_CODE_PATH = "src/routes/users.ts"


def _read(relative_path: str) -> str:
    return (CONTENT_DIR / relative_path).read_text(encoding="utf-8")


def _load_docs(folder: str, names: tuple[str, ...]) -> dict[str, str]:
    return {f"docs/{name}": _read(f"{folder}/{name}") for name in names}


# Documentation repo path -> initial file content
INITIAL_DOCS: dict[str, str] = _load_docs("docs/initial", DOC_FILES)

# Changed source path -> {documentation repo path -> updated file content}
UPDATE_MAPPINGS: dict[str, dict[str, str]] = {
    DEMO_CODE_PATH: _load_docs("docs/updates/users", ("getting-started.md", "how-to-guide.md")),
}

DEMO_CODE_BEFORE = _read("code/users_before.ts")
DEMO_CODE_AFTER = _read("code/users_after.ts")

__all__ = [
    "DEMO_CODE_AFTER",
    "DEMO_CODE_BEFORE",
    "DEMO_CODE_PATH",
    "INITIAL_DOCS",
    "PREDETERMINED_GAPS",
    "UPDATE_MAPPINGS",
]
