"""
Gesture classifier that turns landmark sets into fingerspelling states.

Each frame the whole predicate bank is evaluated into a HandFacts record, an
ordered rule list picks a candidate (first match wins), and evidence counters
decide whether the candidate is committed or still only "possible".
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from . import landmarks as lm
from .config import ClassifierConfig
from .types import (
    CounterFamily,
    Evidence,
    Finger,
    GestureState,
    LandmarkSet,
    StateSink,
    Transition,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandFacts:
    """Predicate values of one landmark set, computed once per frame."""
    pointing_up_index: bool = False
    pointing_up_middle: bool = False
    pointing_up_ring: bool = False
    pointing_up_little: bool = False
    pointing_down_index: bool = False
    pointing_down_middle: bool = False
    pointing_down_ring: bool = False
    pointing_down_little: bool = False
    together_index_middle: bool = False
    together_middle_ring: bool = False
    together_ring_little: bool = False
    four_fingers_touching_palm: bool = False
    thumb_index_curling: bool = False
    index_middle_crossed: bool = False
    index_middle_parallel: bool = False
    thumb_a: bool = False
    thumb_b: bool = False
    thumb_c: bool = False
    thumb_index_spacing_c: bool = False
    thumb_middle_spacing_d: bool = False
    thumb_e: bool = False
    thumb_index_spacing_f: bool = False
    thumb_i: bool = False
    thumb_k: bool = False
    thumb_ly: bool = False
    thumb_n: bool = False
    thumb_index_spacing_o: bool = False
    thumb_p: bool = False
    thumb_q: bool = False
    thumb_s: bool = False
    thumb_t: bool = False
    thumb_uvr: bool = False
    thumb_w: bool = False
    thumb_x: bool = False
    index_sideways: bool = False
    middle_sideways: bool = False
    index_c: bool = False
    index_x: bool = False
    middle_p: bool = False
    little_j: bool = False

    @property
    def four_fingers_pointing_up(self) -> bool:
        return (self.pointing_up_index and self.pointing_up_middle
                and self.pointing_up_ring and self.pointing_up_little)

    @property
    def four_fingers_pointing_down(self) -> bool:
        return (self.pointing_down_index and self.pointing_down_middle
                and self.pointing_down_ring and self.pointing_down_little)

    @property
    def four_fingers_together(self) -> bool:
        return self.together_index_middle and self.together_middle_ring and self.together_ring_little

    @property
    def index_middle_up_only(self) -> bool:
        return (self.pointing_up_index and self.pointing_up_middle
                and self.pointing_down_ring and self.pointing_down_little)


def evaluate_facts(points: LandmarkSet, pinch_max_distance: float) -> HandFacts:
    """
    Evaluate every predicate the decision rules use.

    Args:
        points: Landmarks of the current frame
        pinch_max_distance: Distance used by the palm-touch fact

    Returns:
        HandFacts for this frame
    """
    return HandFacts(
        pointing_up_index=lm.is_finger_pointing_up(points, Finger.INDEX),
        pointing_up_middle=lm.is_finger_pointing_up(points, Finger.MIDDLE),
        pointing_up_ring=lm.is_finger_pointing_up(points, Finger.RING),
        pointing_up_little=lm.is_finger_pointing_up(points, Finger.LITTLE),
        pointing_down_index=lm.is_finger_pointing_down(points, Finger.INDEX),
        pointing_down_middle=lm.is_finger_pointing_down(points, Finger.MIDDLE),
        pointing_down_ring=lm.is_finger_pointing_down(points, Finger.RING),
        pointing_down_little=lm.is_finger_pointing_down(points, Finger.LITTLE),
        together_index_middle=lm.are_two_fingers_together(points, Finger.INDEX, Finger.MIDDLE),
        together_middle_ring=lm.are_two_fingers_together(points, Finger.MIDDLE, Finger.RING),
        together_ring_little=lm.are_two_fingers_together(points, Finger.RING, Finger.LITTLE),
        four_fingers_touching_palm=lm.are_four_fingers_touching_palm(points, pinch_max_distance),
        thumb_index_curling=lm.is_thumb_and_index_curling_towards_each_other(points),
        index_middle_crossed=lm.are_index_middle_crossed(points),
        index_middle_parallel=lm.are_index_middle_parallel(points),
        thumb_a=lm.thumb_matches_a(points),
        thumb_b=lm.thumb_matches_b(points),
        thumb_c=lm.thumb_matches_c(points),
        thumb_index_spacing_c=lm.thumb_index_spacing_matches_c(points),
        thumb_middle_spacing_d=lm.thumb_middle_spacing_matches_d(points),
        thumb_e=lm.thumb_matches_e(points),
        thumb_index_spacing_f=lm.thumb_index_spacing_matches_f(points),
        thumb_i=lm.thumb_matches_i(points),
        thumb_k=lm.thumb_matches_k(points),
        thumb_ly=lm.thumb_matches_ly(points),
        thumb_n=lm.thumb_matches_n(points),
        thumb_index_spacing_o=lm.thumb_index_spacing_matches_o(points),
        thumb_p=lm.thumb_matches_p(points),
        thumb_q=lm.thumb_matches_q(points),
        thumb_s=lm.thumb_matches_s(points),
        thumb_t=lm.thumb_matches_t(points),
        thumb_uvr=lm.thumb_matches_uvr(points),
        thumb_w=lm.thumb_matches_w(points),
        thumb_x=lm.thumb_matches_x(points),
        index_sideways=lm.is_finger_pointing_sideways(points, Finger.INDEX),
        middle_sideways=lm.is_finger_pointing_sideways(points, Finger.MIDDLE),
        index_c=lm.index_matches_c(points),
        index_x=lm.index_matches_x(points),
        middle_p=lm.middle_matches_p(points),
        little_j=lm.little_matches_j(points),
    )


@dataclass(frozen=True)
class DecisionRule:
    """
    One entry of the ordered decision list.

    A rule with state None is a hold: it claims the frame but leaves state
    and counters unchanged.
    """
    name: str
    guard: Callable[[HandFacts], bool]
    state: Optional[GestureState]
    family: Optional[CounterFamily]


def _four_down(f: HandFacts) -> bool:
    return f.four_fingers_pointing_down


def _three_down(f: HandFacts) -> bool:
    return f.pointing_down_index and f.pointing_down_middle and f.pointing_down_ring


LETTER = CounterFamily.LETTER
PINCH = CounterFamily.PINCH

DECISION_RULES: Tuple[DecisionRule, ...] = (
    # Four fingers down, sub-decided by thumb position
    DecisionRule("A", lambda f: _four_down(f) and f.thumb_a, GestureState.A, LETTER),
    DecisionRule("O", lambda f: _four_down(f) and f.thumb_index_spacing_o and f.thumb_index_curling,
                 GestureState.O, PINCH),
    DecisionRule("T", lambda f: _four_down(f) and f.thumb_t, GestureState.T, PINCH),
    DecisionRule("N", lambda f: _four_down(f) and f.thumb_n, GestureState.N, PINCH),
    DecisionRule("E", lambda f: _four_down(f) and f.thumb_e, GestureState.E, LETTER),
    DecisionRule("S", lambda f: _four_down(f) and f.thumb_s, GestureState.S, PINCH),
    DecisionRule("M", _four_down, GestureState.M, PINCH),
    # Index and middle up, ring and little down
    DecisionRule("K", lambda f: f.index_middle_up_only and f.thumb_k and not f.together_index_middle,
                 GestureState.K, LETTER),
    DecisionRule("V", lambda f: f.index_middle_up_only and f.thumb_uvr and not f.together_index_middle,
                 GestureState.V, LETTER),
    DecisionRule("U", lambda f: f.index_middle_up_only and f.thumb_uvr and f.index_middle_parallel,
                 GestureState.U, LETTER),
    DecisionRule("R", lambda f: f.index_middle_up_only and f.thumb_uvr and f.index_middle_crossed,
                 GestureState.R, LETTER),
    DecisionRule("KVUR-hold", lambda f: f.index_middle_up_only, None, None),
    # Index pointing sideways
    DecisionRule("H", lambda f: f.index_sideways and f.middle_sideways, GestureState.H, LETTER),
    DecisionRule("P", lambda f: f.index_sideways and f.middle_p and f.thumb_p, GestureState.P, LETTER),
    DecisionRule("G", lambda f: f.index_sideways and not f.middle_sideways, GestureState.G, LETTER),
    # Remaining letters in priority order
    DecisionRule("B", lambda f: f.four_fingers_pointing_up and f.four_fingers_together and f.thumb_b,
                 GestureState.B, LETTER),
    DecisionRule("C", lambda f: f.thumb_c and f.index_c, GestureState.C, LETTER),
    DecisionRule("D", lambda f: (f.pointing_up_index and not f.pointing_up_middle
                                 and not f.pointing_up_ring and not f.pointing_up_little
                                 and f.thumb_middle_spacing_d
                                 and f.together_middle_ring and f.together_ring_little),
                 GestureState.D, LETTER),
    DecisionRule("F", lambda f: (f.thumb_index_spacing_f and f.pointing_up_middle
                                 and f.pointing_up_ring and f.pointing_up_little),
                 GestureState.F, LETTER),
    DecisionRule("I", lambda f: f.thumb_i and _three_down(f) and f.pointing_up_little,
                 GestureState.I, LETTER),
    DecisionRule("J", lambda f: f.thumb_a and _three_down(f) and f.pointing_up_little and f.little_j,
                 GestureState.J, LETTER),
    DecisionRule("L", lambda f: (f.thumb_ly and f.pointing_up_index and f.pointing_down_middle
                                 and f.pointing_down_ring and f.pointing_down_little),
                 GestureState.L, LETTER),
    DecisionRule("Q", lambda f: f.thumb_q and f.pointing_down_index, GestureState.Q, PINCH),
    DecisionRule("W", lambda f: (f.pointing_up_index and f.pointing_up_middle
                                 and f.pointing_up_ring and not f.pointing_up_little),
                 GestureState.W, LETTER),
    DecisionRule("X", lambda f: (f.thumb_x and f.index_x and f.pointing_down_middle
                                 and f.pointing_down_ring and f.pointing_down_little),
                 GestureState.X, LETTER),
    DecisionRule("Y", lambda f: f.thumb_ly and _three_down(f) and f.pointing_up_little,
                 GestureState.Y, LETTER),
    # No letter matched
    DecisionRule("apart", lambda f: True, GestureState.APART, CounterFamily.APART),
)


def decide(facts: HandFacts, rules: Tuple[DecisionRule, ...] = DECISION_RULES) -> DecisionRule:
    """Return the first rule whose guard holds for these facts."""
    for rule in rules:
        if rule.guard(facts):
            return rule
    # The apart rule always matches, so this only triggers with a custom list
    raise ValueError("No decision rule matched")


def advance(evidence: Evidence, rule: DecisionRule, trigger: int) -> Tuple[Evidence, Optional[GestureState]]:
    """
    Accumulate evidence for the winning rule.

    A candidate different from the previous frame's zeroes every counter
    first. The rule's counter family then increments and the other two are
    zero.

    Args:
        evidence: Counters after the previous frame
        rule: Winning decision rule
        trigger: Frames of agreement needed to commit

    Returns:
        Tuple of (new evidence, state to assign or None for a hold)
    """
    if rule.state is None:
        return evidence, None

    if rule.state != evidence.candidate:
        evidence = Evidence(candidate=rule.state)

    count = evidence.count(rule.family) + 1
    counts = {family.value: 0 for family in CounterFamily}
    counts[rule.family.value] = count
    new_evidence = Evidence(candidate=rule.state, **counts)

    if rule.family is CounterFamily.APART:
        state = GestureState.APART if count >= trigger else GestureState.POSSIBLE_APART
    else:
        state = rule.state if count >= trigger else GestureState.POSSIBLE_LETTER
    return new_evidence, state


def transition(current: GestureState, evidence: Evidence, facts: HandFacts, trigger: int,
               notify_on_every_assignment: bool = True) -> Tuple[Transition, DecisionRule]:
    """
    Pure classifier step: decide, accumulate and report whether to notify.

    Returns:
        Tuple of (transition, winning rule)
    """
    rule = decide(facts)
    new_evidence, state = advance(evidence, rule, trigger)
    if state is None:
        return Transition(previous=current, state=current, evidence=new_evidence, notify=False), rule

    notify = notify_on_every_assignment or state != current
    return Transition(previous=current, state=state, evidence=new_evidence, notify=notify), rule


class GestureClassifier:
    """
    State machine that classifies a stream of landmark sets into fingerspelling states.

    Features:
    - Ordered decision rules, first match wins
    - Evidence counters so a letter is only committed after agreeing frames
    - Synchronous state sink notified on each state assignment
    - Explicit reset for when the hand is lost
    """

    def __init__(self, pinch_max_distance: float = 50.0, evidence_counter_state_trigger: int = 10,
                 on_state_change: Optional[StateSink] = None,
                 notify_on_every_assignment: bool = True):
        """
        Initialize the classifier.

        Args:
            pinch_max_distance: Distance (image units) used by the palm-touch fact
            evidence_counter_state_trigger: Agreeing frames needed to commit a state
            on_state_change: Callback invoked with each assigned state
            notify_on_every_assignment: If False, only notify when the state changes
        """
        if evidence_counter_state_trigger < 1:
            raise ValueError("evidence_counter_state_trigger must be at least 1")
        self.pinch_max_distance = pinch_max_distance
        self.evidence_counter_state_trigger = evidence_counter_state_trigger
        self.on_state_change = on_state_change
        self.notify_on_every_assignment = notify_on_every_assignment

        self._state = GestureState.UNKNOWN
        self._evidence = Evidence()
        self._last_processed_points_set: Optional[LandmarkSet] = None

    @classmethod
    def from_config(cls, cfg: ClassifierConfig,
                    on_state_change: Optional[StateSink] = None) -> "GestureClassifier":
        return cls(
            pinch_max_distance=cfg.pinch_max_distance,
            evidence_counter_state_trigger=cfg.evidence_counter_state_trigger,
            on_state_change=on_state_change,
            notify_on_every_assignment=cfg.notify_on_every_assignment,
        )

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def evidence(self) -> Evidence:
        return self._evidence

    @property
    def last_processed_points_set(self) -> Optional[LandmarkSet]:
        """Most recent complete landmark set, for rendering fingertip markers."""
        return self._last_processed_points_set

    def process_points_set(self, points: Optional[LandmarkSet]) -> GestureState:
        """
        Classify one frame.

        Args:
            points: Landmarks of the frame. Incomplete sets are refused and
                leave the classifier untouched, like a frame without a hand.

        Returns:
            Current state after the frame
        """
        if points is None or not points.is_complete():
            logger.debug("Refusing incomplete landmark set")
            return self._state

        self._last_processed_points_set = points
        facts = evaluate_facts(points, self.pinch_max_distance)
        step, rule = transition(
            self._state, self._evidence, facts,
            self.evidence_counter_state_trigger, self.notify_on_every_assignment
        )
        logger.debug("Rule %s won (letter=%d pinch=%d apart=%d)", rule.name,
                     step.evidence.letter, step.evidence.pinch, step.evidence.apart)
        self._apply(step)
        return self._state

    def reset(self) -> None:
        """
        Force the state back to UNKNOWN.

        Clears the pinch and apart counters; the letter counter is kept.
        """
        logger.info("Resetting gesture classifier")
        self._evidence = Evidence(
            letter=self._evidence.letter,
            pinch=0,
            apart=0,
            candidate=self._evidence.candidate,
        )
        previous = self._state
        notify = self.notify_on_every_assignment or previous != GestureState.UNKNOWN
        self._apply(Transition(previous=previous, state=GestureState.UNKNOWN,
                               evidence=self._evidence, notify=notify))

    def _apply(self, step: Transition) -> None:
        self._evidence = step.evidence
        self._state = step.state
        if step.state != step.previous and not step.state.is_possible:
            logger.debug("Committed state %s", step.state.value)
        if step.notify and self.on_state_change is not None:
            self.on_state_change(step.state)
