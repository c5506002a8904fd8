"""Glossary of dashboard terms and inline term annotation."""

from __future__ import annotations

GLOSSARY: dict[str, str] = {
    "Carryover rate": (
        "Share of the previous cycle's scope that was not completed and carried into the next "
        "cycle. A high value points at estimation or scope management problems."
    ),
    "Scope creep": (
        "Growth of a cycle's scope (issues or points) after the cycle started, relative to the "
        "planned scope."
    ),
    "WIP": (
        "Work In Progress: the number of issues currently in a started state. Too much WIP causes "
        "context switching and slows delivery."
    ),
    "WIP limit": (
        "Upper bound on issues a person or team works on at once. Exceeding it increases context "
        "switching and lowers throughput."
    ),
    "Cycle time": "Business days from when an issue was started until it was completed.",
    "Lead time": (
        "Business days from when an issue was created until it was completed. Includes backlog "
        "wait time, so it is never shorter than cycle time."
    ),
    "Throughput": "Number of issues completed in a period; a measure of team capacity.",
    "Velocity": "Story points completed per cycle.",
    "Burndown": "Remaining work over the cycle compared with an ideal straight-line decline.",
    "Burnup": "Completed work over the cycle stacked against the (possibly changing) total scope.",
    "Cumulative flow diagram": (
        "Stacked time series of issue counts per workflow state. Widening bands hint at a "
        "bottleneck."
    ),
    "Dwell time": "Average number of days issues stay in a workflow state.",
    "Completion rate": "Completed share of the current cycle's scope.",
    "Percentile": (
        "Position in the sorted data: the 85th percentile is the value 85% of observations fall "
        "at or below."
    ),
}

# Longest terms first so "WIP limit" wins over "WIP"
_SORTED_TERMS: list[str] = sorted(GLOSSARY, key=len, reverse=True)


def describe(term: str) -> str | None:
    return GLOSSARY.get(term)


def annotate(text: str) -> list[tuple[str, str | None]]:
    """Split ``text`` into plain and glossary-term segments.

    Scans left to right and, at each position, tries the longest glossary term
    first. Matching is case-sensitive.

    Parameters
    ----------
    text : str
        Free text such as an insight message.

    Returns
    -------
    list[tuple[str, str | None]]
        ``(segment, term)`` pairs in order; ``term`` is None for plain text.
        Joining the segments reproduces ``text``.
    """
    parts: list[tuple[str, str | None]] = []
    buffer: list[str] = []
    idx = 0
    while idx < len(text):
        match = next((t for t in _SORTED_TERMS if text.startswith(t, idx)), None)
        if match is None:
            buffer.append(text[idx])
            idx += 1
            continue
        if buffer:
            parts.append(("".join(buffer), None))
            buffer = []
        parts.append((match, match))
        idx += len(match)
    if buffer:
        parts.append(("".join(buffer), None))
    return parts
