"""Render a small report into scratch files that disappear on exit.

Run with ``python examples/render_report.py``; the printed paths are gone
once the script finishes.
"""

from __future__ import annotations

import tempwrite


def main() -> None:
    workdir = tempwrite.mkdtemp(prefix="report-")

    rows = [
        {"name": "alpha", "count": 3},
        {"name": "beta", "count": 5},
    ]
    table = tempwrite.write_csv(rows, dir=workdir)
    summary = tempwrite.write_json({"rows": len(rows), "table": table.name}, dir=workdir)
    notes = tempwrite.write_with_pattern("draft", "notes-{timestamp}.md", dir=workdir)

    # Kept after exit
    keep = tempwrite.write("final", "txt", cleanup=False)

    for path in (table, summary, notes, keep):
        print(path)
    print(f"tracked: {len(tempwrite.list_tracked())}")


if __name__ == "__main__":
    main()
