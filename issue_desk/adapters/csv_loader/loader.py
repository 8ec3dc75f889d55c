"""CSV loader — reads and normalizes seed files for agents and issues."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from issue_desk.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_expertise,
    parse_issue_type,
)
from issue_desk.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Pick the delimiter (comma/semicolon/tab) that appears most in the header."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_agents(file_path: Path) -> list[dict]:
    """Load and normalize the agents CSV.

    Expected columns (after normalization):
        name, email, expertise (or skills / issue_types)

    A row whose expertise names an unknown issue type is kept with an empty
    expertise set and its message under "error", so callers can count it
    as rejected.
    """
    rows = _read_csv(file_path)
    agents = []
    for line_no, row in enumerate(rows, start=2):
        agent = {
            "name": row.get("name") or row.get("agent_name") or "",
            "email": row.get("email") or row.get("agent_email") or "",
            "expertise": set(),
            "error": None,
        }
        raw_expertise = (
            row.get("expertise")
            or row.get("skills")
            or row.get("issue_types")
        )
        try:
            agent["expertise"] = parse_expertise(raw_expertise)
        except ValidationError as e:
            logger.warning("%s line %d: %s", file_path.name, line_no, e)
            agent["error"] = str(e)
        agents.append(agent)
    rejected = sum(1 for a in agents if a["error"])
    logger.info("Parsed %d agents (%d with errors)", len(agents), rejected)
    return agents


def load_issues(file_path: Path) -> list[dict]:
    """Load and normalize the issues CSV.

    Expected columns (after normalization):
        transaction_id (or txn_id), type (or issue_type), subject,
        description, email (or reporter_email)

    A row with a missing or unknown type is kept with issue_type None and
    its message under "error".
    """
    rows = _read_csv(file_path)
    issues = []
    for line_no, row in enumerate(rows, start=2):
        issue = {
            "transaction_id": row.get("transaction_id") or row.get("txn_id") or "",
            "issue_type": None,
            "subject": row.get("subject") or "",
            "description": row.get("description") or "",
            "email": row.get("email") or row.get("reporter_email") or "",
            "error": None,
        }
        try:
            issue["issue_type"] = parse_issue_type(row.get("type") or row.get("issue_type"))
        except ValidationError as e:
            logger.warning("%s line %d: %s", file_path.name, line_no, e)
            issue["error"] = str(e)
        issues.append(issue)
    rejected = sum(1 for i in issues if i["error"])
    logger.info("Parsed %d issues (%d with errors)", len(issues), rejected)
    return issues
