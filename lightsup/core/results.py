"""Time formatting and the plain-text results summary players can share."""

from __future__ import annotations

from typing import List, Optional

from lightsup.core.preferences import UserPreferences
from lightsup.core.records import BestTimeRecord, GameModes

EMPTY_TIME = "-:--.--"


def format_time(time_ms: float) -> str:
    """Format milliseconds as ``MM:SS.cc``, rounding down."""
    time_ms = max(0.0, time_ms)
    total_seconds = int(time_ms // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    centis = int((time_ms % 1000) // 10)
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


def format_record(record: Optional[BestTimeRecord]) -> str:
    return format_time(record.time) if record is not None else EMPTY_TIME


def mode_labels(modes: GameModes) -> List[str]:
    labels = []
    if modes.is_random:
        labels.append("Random Start")
    if modes.is_hard:
        labels.append("Hard Mode")
    return labels


def results_summary(
    final_times: List[float],
    clicks: List[int],
    modes: GameModes,
    seed: str,
    preferences: Optional[UserPreferences] = None,
    is_new_record: bool = False,
) -> str:
    prefs = preferences or UserPreferences()
    lines = ["LightsUp Competitive"]
    if prefs.show_timers:
        total = format_time(sum(final_times))
        lines.append(f"Total Time: {total}" + (" (New Record!)" if is_new_record else ""))
    if prefs.show_move_stats:
        lines.append(f"Total Clicks: {sum(clicks)}")
    if prefs.show_timers or prefs.show_move_stats:
        for index, time_ms in enumerate(final_times):
            parts = []
            if prefs.show_move_stats:
                parts.append(f"{clicks[index]} clicks")
            if prefs.show_timers:
                parts.append(format_time(time_ms))
            lines.append(f"Board {index + 1}: " + ", ".join(parts))
    labels = mode_labels(modes)
    if labels:
        lines.append("Modes: " + ", ".join(labels))
    if seed:
        lines.append(f"Seed: {seed}")
    return "\n".join(lines)
