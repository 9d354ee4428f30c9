"""
Landmark geometry predicates used by the fingerspelling classifier.

Every function here is a pure function of one LandmarkSet. Coordinates are
image coordinates, so y grows downward and "up" means a negative y delta.
"""
import logging
import math
from typing import Optional, Sequence, Tuple

from .config import THRESHOLDS, GeometryThresholds
from .types import Finger, LandmarkSet, Point

logger = logging.getLogger(__name__)

FOUR_FINGERS = (Finger.INDEX, Finger.MIDDLE, Finger.RING, Finger.LITTLE)

# Wrist and fingertips use the stricter confidence gate
TIP_LANDMARK_INDICES = frozenset({0, 4, 8, 12, 16, 20})


# ---------- distances ----------
def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two landmarks."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def reference_distance(points: LandmarkSet) -> float:
    """
    Length of the thumb tip to thumb IP segment.

    Used as the unit for spacing thresholds so they do not depend on hand
    size or distance from the camera.
    """
    return distance(points.thumb_tip, points.thumb_ip)


# ---------- segment directions ----------
def segment_points_up(proximal: Point, distal: Point) -> bool:
    """True when the segment goes up and is more vertical than horizontal."""
    dx = distal[0] - proximal[0]
    dy = distal[1] - proximal[1]
    return dy < 0 and abs(dy) > abs(dx)


def segment_points_down(proximal: Point, distal: Point) -> bool:
    """True when the segment goes down and is more vertical than horizontal."""
    dx = distal[0] - proximal[0]
    dy = distal[1] - proximal[1]
    return dy > 0 and abs(dy) > abs(dx)


def segment_points_sideways(proximal: Point, distal: Point) -> bool:
    """True when the segment is more horizontal than vertical."""
    dx = distal[0] - proximal[0]
    dy = distal[1] - proximal[1]
    return abs(dy) < abs(dx)


# ---------- whole finger directions ----------
def is_finger_pointing_up(points: LandmarkSet, finger: Finger) -> bool:
    """
    Check if a finger points up, judged on its PIP to DIP segment.

    Args:
        points: Landmarks of the hand
        finger: Finger to examine (meant for the four fingers)

    Returns:
        True if the DIP sits above the PIP and the segment is mostly vertical
    """
    _, pip, dip, _ = points.joints(finger)
    return segment_points_up(pip, dip)


def is_finger_pointing_down(points: LandmarkSet, finger: Finger) -> bool:
    """
    Check if the top of a finger points down, judged on its DIP (IP) to tip segment.

    The horizontal component is compared signed, not by magnitude, so a tip
    moving far to the left still counts as pointing down.

    Args:
        points: Landmarks of the hand
        finger: Any finger, including the thumb

    Returns:
        True if the tip is below the DIP and dy >= dx
    """
    _, _, second, tip = points.joints(finger)
    dy = tip[1] - second[1]
    dx = tip[0] - second[0]
    return dy > 0 and dy >= dx


def is_finger_pointing_sideways(points: LandmarkSet, finger: Finger) -> bool:
    """Check if both the MCP-PIP and PIP-DIP segments of a finger are horizontal."""
    mcp, pip, dip, _ = points.joints(finger)
    return segment_points_sideways(mcp, pip) and segment_points_sideways(pip, dip)


def are_four_fingers_pointing_up(points: LandmarkSet) -> bool:
    return all(is_finger_pointing_up(points, finger) for finger in FOUR_FINGERS)


def are_four_fingers_pointing_down(points: LandmarkSet) -> bool:
    return all(is_finger_pointing_down(points, finger) for finger in FOUR_FINGERS)


# ---------- thumb portions ----------
def is_thumb_top_portion_pointing_up(points: LandmarkSet) -> bool:
    return segment_points_up(points.thumb_ip, points.thumb_tip)


def is_thumb_top_portion_pointing_sideways(points: LandmarkSet) -> bool:
    return segment_points_sideways(points.thumb_ip, points.thumb_tip)


def is_thumb_bottom_portion_pointing_up(points: LandmarkSet) -> bool:
    return segment_points_up(points.thumb_mp, points.thumb_ip)


def is_thumb_bottom_portion_pointing_sideways(points: LandmarkSet) -> bool:
    """Thumb MP to IP is horizontal and still rising."""
    dx = points.thumb_ip[0] - points.thumb_mp[0]
    dy = points.thumb_ip[1] - points.thumb_mp[1]
    return dy < 0 and abs(dx) > abs(dy)


def is_thumb_pointing_up(points: LandmarkSet) -> bool:
    return is_thumb_top_portion_pointing_up(points) and is_thumb_bottom_portion_pointing_up(points)


def is_thumb_pointing_sideways(points: LandmarkSet) -> bool:
    return (is_thumb_top_portion_pointing_sideways(points)
            and is_thumb_bottom_portion_pointing_sideways(points))


def is_thumb_within_palm_x(points: LandmarkSet) -> bool:
    """
    Check if the thumb tip lies horizontally within the palm.

    The palm spans from the thumb MP to the little finger MCP. Bounds are
    taken as min/max so the check works for left and right hands alike.

    Args:
        points: Landmarks of the hand

    Returns:
        True if thumb tip x is inside [min, max] of the two reference x values
    """
    lower = min(points.thumb_mp[0], points.little_mcp[0])
    upper = max(points.thumb_mp[0], points.little_mcp[0])
    return lower <= points.thumb_tip[0] <= upper


def is_thumb_pointing_sideways_and_away_from_palm(points: LandmarkSet) -> bool:
    return is_thumb_pointing_sideways(points) and not is_thumb_within_palm_x(points)


def _strictly_between(value: float, a: float, b: float) -> bool:
    return min(a, b) < value < max(a, b)


# ---------- finger pairs ----------
def _index_middle_x_gaps(points: LandmarkSet) -> Tuple[float, float]:
    diff_tips = points.index_tip[0] - points.middle_tip[0]
    diff_mcps = points.index_mcp[0] - points.middle_mcp[0]
    return diff_tips, diff_mcps


def are_index_middle_crossed(points: LandmarkSet) -> bool:
    """Tips and MCPs of index and middle are ordered oppositely along x."""
    diff_tips, diff_mcps = _index_middle_x_gaps(points)
    return (diff_tips > 0 and diff_mcps < 0) or (diff_tips < 0 and diff_mcps > 0)


def are_index_middle_parallel(points: LandmarkSet) -> bool:
    """Tips and MCPs of index and middle are ordered the same way along x."""
    diff_tips, diff_mcps = _index_middle_x_gaps(points)
    return (diff_tips > 0 and diff_mcps > 0) or (diff_tips < 0 and diff_mcps < 0)


def are_two_fingers_together(points: LandmarkSet, finger1: Finger, finger2: Finger,
                             thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    """
    Check if two of the four fingers are held together.

    The fingers count as together when the horizontal gap between their tips
    is at most 1.2 times the horizontal gap between their MCPs.

    Args:
        points: Landmarks of the hand
        finger1: First finger
        finger2: Second finger
        thresholds: Decision boundaries

    Returns:
        True if the tips converge relative to the width of their bases
    """
    if finger1 is finger2:
        return True
    mcp1, _, _, tip1 = points.joints(finger1)
    mcp2, _, _, tip2 = points.joints(finger2)
    tips_gap = abs(tip1[0] - tip2[0])
    mcps_gap = abs(mcp1[0] - mcp2[0])
    return tips_gap <= mcps_gap * thresholds.fingers_together_ratio


def are_four_fingers_together(points: LandmarkSet) -> bool:
    return (are_two_fingers_together(points, Finger.INDEX, Finger.MIDDLE)
            and are_two_fingers_together(points, Finger.MIDDLE, Finger.RING)
            and are_two_fingers_together(points, Finger.RING, Finger.LITTLE))


def angle_between_fingers(points: LandmarkSet, finger1: Finger, finger2: Finger) -> float:
    """Absolute angle in degrees between two fingertips as seen from the wrist."""
    wrist = points.wrist
    tip1 = points.joints(finger1)[3]
    tip2 = points.joints(finger2)[3]
    angle1 = math.atan2(tip1[1] - wrist[1], tip1[0] - wrist[0])
    angle2 = math.atan2(tip2[1] - wrist[1], tip2[0] - wrist[0])
    return abs(math.degrees(angle2 - angle1))


def are_fingers_touching_by_angle(points: LandmarkSet, finger1: Finger, finger2: Finger,
                                  thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    return angle_between_fingers(points, finger1, finger2) < thresholds.touching_max_angle_deg


def are_four_fingers_touching_palm(points: LandmarkSet, pinch_max_distance: float,
                                   thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    """Index and middle tips rest near the thumb base (the others follow them)."""
    limit = pinch_max_distance * thresholds.palm_touch_ratio
    return (distance(points.thumb_cmc, points.index_tip) < limit
            and distance(points.thumb_cmc, points.middle_tip) < limit)


# ---------- curl ----------
def is_finger_curled_forward(points: LandmarkSet, finger: Finger,
                             thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    """
    Check if a finger arches forward, as the index does when forming an O.

    Args:
        points: Landmarks of the hand
        finger: One of the four fingers
        thresholds: Decision boundaries

    Returns:
        True if the finger points down and its tip reaches between 1x and 2.5x
        the PIP-MCP length away from the MCP
    """
    mcp, pip, _, tip = points.joints(finger)
    reach = distance(tip, mcp)
    segment = distance(pip, mcp)
    tip_far_from_mcp = (segment * thresholds.curl_reach_min_ratio < reach
                        < segment * thresholds.curl_reach_max_ratio)
    return is_finger_pointing_down(points, finger) and tip_far_from_mcp


def is_thumb_and_index_curling_towards_each_other(points: LandmarkSet) -> bool:
    return (is_finger_curled_forward(points, Finger.INDEX)
            and is_thumb_bottom_portion_pointing_sideways(points))


# ---------- letter specific thumb shapes ----------
def thumb_matches_a(points: LandmarkSet) -> bool:
    """Thumb raised beside the fist, outside the palm."""
    return (not is_thumb_within_palm_x(points)
            and is_thumb_bottom_portion_pointing_up(points)
            and is_thumb_top_portion_pointing_up(points))


def thumb_matches_b(points: LandmarkSet) -> bool:
    """Thumb folded across the palm."""
    return is_thumb_within_palm_x(points)


def thumb_matches_c(points: LandmarkSet) -> bool:
    return is_thumb_pointing_sideways(points)


def thumb_matches_e(points: LandmarkSet) -> bool:
    """
    Thumb tucked under the curled fingers.

    Uses the middle and ring DIPs because the thumb tip may overlap the fingertips.
    """
    below_middle = points.thumb_tip[1] - points.middle_dip[1] > 0
    below_ring = points.thumb_tip[1] - points.ring_dip[1] > 0
    return below_middle and below_ring and is_thumb_within_palm_x(points)


def thumb_matches_i(points: LandmarkSet) -> bool:
    return is_thumb_within_palm_x(points)


def thumb_matches_k(points: LandmarkSet) -> bool:
    """Thumb points up with its tip between the index and middle tips."""
    return (is_thumb_pointing_up(points)
            and _strictly_between(points.thumb_tip[0], points.middle_tip[0], points.index_tip[0]))


def thumb_matches_n(points: LandmarkSet) -> bool:
    """
    Thumb tip between middle and little PIPs and above the ring tip.

    The little PIP is used because the thumb tip tends to cover the ring finger.
    """
    between = _strictly_between(points.thumb_tip[0], points.middle_pip[0], points.little_pip[0])
    return between and points.thumb_tip[1] < points.ring_tip[1]


def thumb_matches_p(points: LandmarkSet) -> bool:
    """Top and middle thumb sections both go down (direction only)."""
    top_down = points.thumb_tip[1] - points.thumb_ip[1] > 0
    middle_down = points.thumb_ip[1] - points.thumb_mp[1] > 0
    return top_down and middle_down


def thumb_matches_q(points: LandmarkSet) -> bool:
    return is_finger_pointing_down(points, Finger.THUMB)


def thumb_matches_s(points: LandmarkSet) -> bool:
    return is_thumb_within_palm_x(points)


def thumb_matches_t(points: LandmarkSet) -> bool:
    """Thumb tip between index and middle PIPs and above the ring tip."""
    between = _strictly_between(points.thumb_tip[0], points.index_pip[0], points.middle_pip[0])
    return between and points.thumb_tip[1] < points.ring_tip[1]


def thumb_matches_uvr(points: LandmarkSet) -> bool:
    """Thumb tip closer to the ring PIP than to its own MP joint."""
    return distance(points.thumb_tip, points.ring_pip) < distance(points.thumb_tip, points.thumb_mp)


def thumb_matches_w(points: LandmarkSet) -> bool:
    """Thumb tip holds the little finger down near its PIP."""
    return distance(points.thumb_tip, points.little_pip) < reference_distance(points)


def thumb_matches_x(points: LandmarkSet) -> bool:
    return is_thumb_within_palm_x(points)


def thumb_matches_ly(points: LandmarkSet) -> bool:
    return is_thumb_pointing_sideways_and_away_from_palm(points)


# ---------- letter specific spacing ----------
def thumb_index_spacing_matches_c(points: LandmarkSet,
                                  thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    ref = reference_distance(points)
    gap = distance(points.thumb_tip, points.index_tip)
    return ref * thresholds.c_spacing_min_ratio < gap < ref * thresholds.c_spacing_max_ratio


def thumb_middle_spacing_matches_d(points: LandmarkSet,
                                   thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    ref = reference_distance(points)
    return distance(points.thumb_tip, points.middle_tip) < ref * thresholds.touching_ratio


def thumb_index_spacing_matches_f(points: LandmarkSet,
                                  thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    ref = reference_distance(points)
    return distance(points.thumb_tip, points.index_tip) < ref * thresholds.touching_ratio


def thumb_index_spacing_matches_o(points: LandmarkSet,
                                  thresholds: GeometryThresholds = THRESHOLDS) -> bool:
    ref = reference_distance(points)
    return distance(points.thumb_tip, points.index_tip) < ref * thresholds.o_spacing_ratio


# ---------- letter specific finger shapes ----------
def index_matches_c(points: LandmarkSet) -> bool:
    return segment_points_sideways(points.index_pip, points.index_dip)


def index_matches_x(points: LandmarkSet) -> bool:
    """Index base section stands up while the middle section hooks sideways and up."""
    base_up = segment_points_up(points.index_mcp, points.index_pip)
    dx = points.index_dip[0] - points.index_pip[0]
    dy = points.index_dip[1] - points.index_pip[1]
    hooked = dy < 0 and abs(dy) < abs(dx)
    return base_up and hooked


def middle_matches_p(points: LandmarkSet) -> bool:
    return (segment_points_down(points.middle_mcp, points.middle_pip)
            and segment_points_down(points.middle_pip, points.middle_dip))


def little_matches_j(points: LandmarkSet) -> bool:
    """Little finger base points to the side while still rising."""
    dx = points.little_pip[0] - points.little_mcp[0]
    dy = points.little_pip[1] - points.little_mcp[1]
    return dy < 0 and abs(dy) < abs(dx)


# ---------- detector gate ----------
def landmark_set_from_observations(
    observations: Sequence[Optional[Tuple[float, float, float]]],
    thresholds: GeometryThresholds = THRESHOLDS,
) -> Optional[LandmarkSet]:
    """
    Build a landmark set from detector output, applying the confidence gate.

    Args:
        observations: 21 (x, y, confidence) tuples in landmark index order;
            None marks a landmark the detector did not return
        thresholds: Confidence cutoffs

    Returns:
        LandmarkSet, or None if any landmark is missing or below its cutoff
    """
    if len(observations) != 21:
        logger.debug("Rejected hand with %d landmarks", len(observations))
        return None

    coords = []
    for idx, obs in enumerate(observations):
        if obs is None:
            return None
        x, y, confidence = obs
        cutoff = (thresholds.tip_min_confidence if idx in TIP_LANDMARK_INDICES
                  else thresholds.joint_min_confidence)
        if not confidence > cutoff:
            logger.debug("Landmark %d below confidence gate (%.2f <= %.2f)", idx, confidence, cutoff)
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        coords.append((x, y))

    return LandmarkSet.from_points(coords)
