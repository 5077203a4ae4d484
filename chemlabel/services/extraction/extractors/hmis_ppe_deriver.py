"""HMIS personal protection letter derived from Section 8 wording."""

from dataclasses import dataclass
from typing import Callable, NamedTuple

UNCLEAR_PPE_CODE = "X"


@dataclass(frozen=True)
class PPEFlags:
    """Presence of each equipment family in the PPE text."""

    glasses: bool = False
    goggles: bool = False
    face_shield: bool = False
    gloves: bool = False
    apron: bool = False
    dust_mask: bool = False
    vapor_respirator: bool = False
    supplied_air: bool = False
    full_face: bool = False

    @classmethod
    def from_text(cls, text: str) -> "PPEFlags":
        lower = (text or "").lower()
        return cls(
            glasses="safety glasses" in lower or "eye protection" in lower,
            goggles="goggles" in lower or "splash" in lower,
            face_shield="face shield" in lower,
            gloves="gloves" in lower or "hand protection" in lower,
            apron="apron" in lower or "protective clothing" in lower,
            dust_mask="dust mask" in lower or "particulate" in lower,
            vapor_respirator="vapor" in lower or "respirator" in lower,
            supplied_air="supplied air" in lower or "scba" in lower,
            full_face="full face" in lower,
        )


class PPERule(NamedTuple):
    code: str
    applies: Callable[[PPEFlags], bool]


class HMISPPECodeDeriver:
    """Maps equipment flags to one HMIS PPE letter.

    Rules are checked strictly in order and the first one that holds wins,
    so the most protective combination is reported even when weaker
    equipment is also mentioned.
    """

    RULES: tuple[PPERule, ...] = (
        PPERule("K", lambda f: f.full_face and f.gloves and f.apron and f.supplied_air),
        PPERule("J", lambda f: f.glasses and f.gloves and f.supplied_air),
        PPERule("I", lambda f: f.full_face and f.gloves and f.apron and f.vapor_respirator),
        PPERule("H", lambda f: f.goggles and f.gloves and f.apron and f.vapor_respirator),
        PPERule("G", lambda f: f.glasses and f.gloves and f.apron and f.vapor_respirator),
        PPERule("F", lambda f: f.glasses and f.apron and f.gloves and f.dust_mask),
        PPERule("E", lambda f: f.glasses and f.gloves and f.dust_mask),
        PPERule("D", lambda f: f.face_shield and f.apron and f.gloves),
        PPERule("C", lambda f: f.glasses and f.apron),
        PPERule("B", lambda f: f.glasses and f.gloves),
        PPERule("A", lambda f: f.glasses and not f.gloves),
    )

    @classmethod
    def derive_from_flags(cls, flags: PPEFlags) -> str:
        for rule in cls.RULES:
            if rule.applies(flags):
                return rule.code
        return UNCLEAR_PPE_CODE

    @classmethod
    def derive(cls, text: str) -> str:
        """Return the HMIS PPE letter (A-K, or X when unclear) for ``text``."""
        return cls.derive_from_flags(PPEFlags.from_text(text))
