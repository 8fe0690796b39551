"""
Panel pairing and panel-to-project matching.

Pure functions over ids so the algorithms can be checked without a
database; PanelService does the loading and persisting.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def pair_faculty(faculty_ids: Sequence[int]) -> List[Tuple[int, int]]:
    """Pair faculty into panels in stored order.

    Consecutive members form disjoint pairs. With an odd pool the last
    member is paired with the first, who then sits on two panels.
    """
    if len(faculty_ids) < 2:
        return []

    pairs = []
    for i in range(len(faculty_ids) // 2):
        pairs.append((faculty_ids[i * 2], faculty_ids[i * 2 + 1]))

    if len(faculty_ids) % 2 != 0:
        pairs.append((faculty_ids[-1], faculty_ids[0]))

    return pairs


def eligible_panels(guide_id: int, panels: Iterable[Tuple[int, int, int]]) -> List[int]:
    """Ids of panels (panel_id, faculty1_id, faculty2_id) without the guide"""
    return [
        panel_id for panel_id, faculty1_id, faculty2_id in panels
        if faculty1_id != guide_id and faculty2_id != guide_id
    ]


def least_used_panel(candidates: List[int], usage: Dict[int, int]) -> Optional[int]:
    """Lowest usage count wins; ties go to the first candidate"""
    best = None
    for panel_id in candidates:
        if best is None or usage.get(panel_id, 0) < usage.get(best, 0):
            best = panel_id
    return best


def plan_panel_assignments(projects: Iterable[Tuple[int, int]],
                           panels: Sequence[Tuple[int, int, int]],
                           usage: Dict[int, int]) -> Tuple[List[Tuple[int, int]], List[int]]:
    """Greedy load-balanced assignment of panels to projects.

    ``projects`` are (project_id, guide_faculty_id) in processing order.
    ``usage`` holds the current project count per panel and is updated in
    place as assignments are made. Returns (assignments, skipped project ids).
    """
    assignments = []
    skipped = []

    for project_id, guide_id in projects:
        candidates = eligible_panels(guide_id, panels)
        if not candidates:
            logger.warning(f"No eligible panel found for project {project_id}")
            skipped.append(project_id)
            continue

        panel_id = least_used_panel(candidates, usage)
        assignments.append((project_id, panel_id))
        usage[panel_id] = usage.get(panel_id, 0) + 1

    return assignments, skipped
