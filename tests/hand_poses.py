"""
Synthetic hand poses in pixel coordinates (y grows downward).

Every pose starts from a closed fist with the four fingers curled down and
overrides the joints that make the handshape.
"""
from typing import Dict

from fingerspell.types import LandmarkSet, Point

FIST: Dict[str, Point] = {
    "wrist": (100, 300),
    "thumb_cmc": (70, 270),
    "thumb_mp": (55, 240),
    "thumb_ip": (50, 210),
    "thumb_tip": (48, 180),
    "index_mcp": (80, 200),
    "index_pip": (80, 170),
    "index_dip": (80, 185),
    "index_tip": (80, 200),
    "middle_mcp": (100, 200),
    "middle_pip": (100, 170),
    "middle_dip": (100, 185),
    "middle_tip": (100, 200),
    "ring_mcp": (120, 205),
    "ring_pip": (120, 175),
    "ring_dip": (120, 190),
    "ring_tip": (120, 205),
    "little_mcp": (140, 210),
    "little_pip": (140, 185),
    "little_dip": (140, 198),
    "little_tip": (140, 210),
}

# Thumb variants
THUMB_RAISED = dict(thumb_cmc=(70, 270), thumb_mp=(55, 240), thumb_ip=(50, 210), thumb_tip=(48, 180))
THUMB_OUT = dict(thumb_cmc=(70, 270), thumb_mp=(50, 255), thumb_ip=(30, 245), thumb_tip=(10, 240))
THUMB_ACROSS_PALM = dict(thumb_cmc=(75, 270), thumb_mp=(70, 240), thumb_ip=(90, 225), thumb_tip=(110, 215))
THUMB_UP_BETWEEN = dict(thumb_cmc=(70, 270), thumb_mp=(80, 240), thumb_ip=(88, 210), thumb_tip=(92, 180))
THUMB_TO_RING = dict(thumb_cmc=(70, 270), thumb_mp=(85, 235), thumb_ip=(105, 215), thumb_tip=(118, 190))

# Finger variants
LITTLE_UP = dict(little_pip=(140, 185), little_dip=(141, 160), little_tip=(142, 140))
INDEX_UP = dict(index_pip=(80, 170), index_dip=(80, 140), index_tip=(80, 115))
INDEX_MIDDLE_SPREAD = dict(
    index_pip=(75, 150), index_dip=(70, 120), index_tip=(65, 95),
    middle_pip=(108, 150), middle_dip=(115, 120), middle_tip=(120, 95),
)
INDEX_MIDDLE_SIDE_BY_SIDE = dict(
    index_pip=(82, 150), index_dip=(84, 120), index_tip=(86, 95),
    middle_pip=(98, 150), middle_dip=(96, 120), middle_tip=(94, 95),
)
INDEX_MIDDLE_CROSSED = dict(
    index_pip=(85, 150), index_dip=(92, 120), index_tip=(98, 95),
    middle_pip=(95, 150), middle_dip=(90, 120), middle_tip=(86, 95),
)
FLAT_HAND = dict(
    index_pip=(82, 150), index_dip=(83, 120), index_tip=(84, 95),
    middle_pip=(100, 148), middle_dip=(100, 118), middle_tip=(100, 92),
    ring_pip=(118, 152), ring_dip=(117, 122), ring_tip=(116, 97),
    little_pip=(137, 165), little_dip=(135, 140), little_tip=(134, 120),
)
INDEX_SIDEWAYS = dict(index_pip=(50, 195), index_dip=(30, 193), index_tip=(15, 192))
MIDDLE_SIDEWAYS = dict(middle_pip=(70, 205), middle_dip=(50, 206), middle_tip=(35, 207))
FINGERS_SPREAD = dict(
    index_pip=(65, 150), index_dip=(58, 120), index_tip=(52, 95),
    middle_pip=(100, 145), middle_dip=(100, 115), middle_tip=(100, 90),
    ring_pip=(133, 152), ring_dip=(140, 123), ring_tip=(146, 98),
    little_pip=(160, 170), little_dip=(170, 148), little_tip=(178, 130),
)
# Index, middle and ring rise at the PIP but hook their tips back down
THREE_HOOKED = dict(
    index_pip=(80, 170), index_dip=(80, 150), index_tip=(80, 165),
    middle_pip=(100, 170), middle_dip=(100, 150), middle_tip=(100, 165),
    ring_pip=(120, 170), ring_dip=(120, 150), ring_tip=(120, 165),
)

# Thumb folded in front of the curled fingers, tip varies per letter
_THUMB_FOLDED = dict(thumb_cmc=(75, 270), thumb_mp=(65, 235), thumb_ip=(85, 180))


def pose(**overrides: Point) -> LandmarkSet:
    """Fist with the given landmarks replaced."""
    unknown = set(overrides) - set(FIST)
    if unknown:
        raise KeyError(f"Unknown landmarks: {sorted(unknown)}")
    return LandmarkSet(**{**FIST, **overrides})


def letter_a() -> LandmarkSet:
    return pose(**THUMB_RAISED)


def letter_b() -> LandmarkSet:
    return pose(**FLAT_HAND, **THUMB_ACROSS_PALM)


def letter_c() -> LandmarkSet:
    # Index middle section arcs sideways, tip kept above the DIP
    return pose(index_pip=(70, 170), index_dip=(50, 165), index_tip=(35, 160), **THUMB_OUT)


def letter_d() -> LandmarkSet:
    return pose(**INDEX_UP, thumb_mp=(75, 240), thumb_ip=(90, 220), thumb_tip=(98, 205))


def letter_f() -> LandmarkSet:
    return pose(
        index_pip=(75, 170), index_dip=(70, 185), index_tip=(72, 195),
        **{k: v for k, v in FLAT_HAND.items() if not k.startswith("index")},
        thumb_mp=(70, 245), thumb_ip=(80, 220), thumb_tip=(75, 200),
    )


def letter_j() -> LandmarkSet:
    return pose(little_pip=(170, 200), little_dip=(171, 175), little_tip=(172, 155), **THUMB_RAISED)


def letter_p() -> LandmarkSet:
    return pose(
        **INDEX_SIDEWAYS,
        middle_pip=(105, 230), middle_dip=(108, 255), middle_tip=(110, 270),
        thumb_mp=(60, 200), thumb_ip=(65, 220), thumb_tip=(66, 240),
    )


def letter_q() -> LandmarkSet:
    # Middle, ring and little fold in with their tips back above the DIPs
    return pose(
        index_pip=(75, 225), index_dip=(72, 245), index_tip=(70, 262),
        middle_tip=(100, 178), ring_tip=(120, 183), little_tip=(140, 192),
        thumb_mp=(60, 230), thumb_ip=(58, 250), thumb_tip=(57, 268),
    )


X_INDEX = dict(index_pip=(82, 170), index_dip=(100, 165), index_tip=(110, 168))


def letter_x() -> LandmarkSet:
    return pose(**X_INDEX, thumb_cmc=(75, 270), thumb_mp=(70, 240), thumb_ip=(85, 215), thumb_tip=(95, 195))


def x_index_with_sideways_thumb() -> LandmarkSet:
    """X index hook, but the thumb lies sideways across the palm like a C."""
    return pose(**X_INDEX, **THUMB_ACROSS_PALM)


def letter_e() -> LandmarkSet:
    return pose(**{**_THUMB_FOLDED, "thumb_ip": (85, 185)}, thumb_tip=(100, 195))


def letter_g() -> LandmarkSet:
    return pose(**INDEX_SIDEWAYS, **THUMB_RAISED)


def letter_h() -> LandmarkSet:
    return pose(**INDEX_SIDEWAYS, **MIDDLE_SIDEWAYS, **THUMB_RAISED)


def letter_i() -> LandmarkSet:
    return pose(**LITTLE_UP, **THUMB_ACROSS_PALM)


def letter_k() -> LandmarkSet:
    return pose(**INDEX_MIDDLE_SPREAD, **THUMB_UP_BETWEEN)


def letter_l() -> LandmarkSet:
    return pose(**INDEX_UP, **THUMB_OUT)


def letter_m() -> LandmarkSet:
    return pose(**THUMB_OUT)


def letter_n() -> LandmarkSet:
    return pose(**_THUMB_FOLDED, thumb_tip=(110, 170))


def letter_o() -> LandmarkSet:
    return pose(
        index_pip=(60, 185), index_dip=(45, 190), index_tip=(40, 205),
        thumb_cmc=(75, 270), thumb_mp=(60, 250), thumb_ip=(35, 240), thumb_tip=(30, 220),
    )


def letter_r() -> LandmarkSet:
    return pose(**INDEX_MIDDLE_CROSSED, **THUMB_TO_RING)


def letter_s() -> LandmarkSet:
    return pose(**_THUMB_FOLDED, thumb_tip=(100, 170))


def letter_t() -> LandmarkSet:
    return pose(**_THUMB_FOLDED, thumb_tip=(90, 170))


def letter_u() -> LandmarkSet:
    return pose(**INDEX_MIDDLE_SIDE_BY_SIDE, **THUMB_TO_RING)


def letter_v() -> LandmarkSet:
    return pose(**INDEX_MIDDLE_SPREAD, **THUMB_TO_RING)


def letter_w() -> LandmarkSet:
    return pose(**{k: v for k, v in FLAT_HAND.items() if not k.startswith("little")},
                **THUMB_ACROSS_PALM)


def letter_y() -> LandmarkSet:
    return pose(**LITTLE_UP, **THUMB_OUT)


def hooked_fist() -> LandmarkSet:
    """Four fingers count as down, yet index, middle and ring also count as up."""
    return pose(**THREE_HOOKED, **THUMB_RAISED)


def two_fingers_unresolved() -> LandmarkSet:
    """Index and middle up with a thumb that fits none of K, V, U or R."""
    return pose(**INDEX_MIDDLE_SPREAD, **THUMB_OUT)


def open_hand() -> LandmarkSet:
    return pose(**FINGERS_SPREAD, **THUMB_OUT)
