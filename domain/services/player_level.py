from typing import Dict, Iterable, Sequence

from domain.models.participant import PlayerAttribute, PlayerAttributeType, PlayerSkill

DEFAULT_COEFFICIENTS: Dict[PlayerAttributeType, float] = {
    PlayerAttributeType.FITNESS: 1.0,
    PlayerAttributeType.LEADERSHIP: 1.0,
}


def attribute_coefficient(
    attributes: Iterable[PlayerAttribute], attribute_type: PlayerAttributeType
) -> float:
    """First attribute with a matching name wins, missing or null values use the default."""
    for attr in attributes:
        if attr.attribute == attribute_type.value:
            if attr.value is None:
                break
            return attr.value
    return DEFAULT_COEFFICIENTS[attribute_type]


def calculate_player_level(
    skills: Sequence[PlayerSkill], attributes: Sequence[PlayerAttribute]
) -> float:
    """
    Level = sum(skill.level) x fitness x leadership.

    No clamping or rounding here, team averages are rounded later.
    """
    skills_sum = sum(skill.level for skill in skills)
    fitness = attribute_coefficient(attributes, PlayerAttributeType.FITNESS)
    leadership = attribute_coefficient(attributes, PlayerAttributeType.LEADERSHIP)
    return skills_sum * fitness * leadership
