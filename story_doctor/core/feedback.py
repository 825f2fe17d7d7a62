"""Reading tips and warnings per suitability label.

Plain lookup tables keyed by ``SuitabilityLabel``. Every table must cover
every label; ``tests/test_feedback.py`` enforces that.
"""

from story_doctor.core.schemas_assessment import Language, SuitabilityLabel

TIPS: dict[str, dict[SuitabilityLabel, tuple[str, ...]]] = {
    "ko": {
        SuitabilityLabel.HIGHLY_SUITABLE: (
            "이 작품은 당신의 취향에 매우 잘 맞습니다!",
            "처음부터 끝까지 몰입해서 읽으실 수 있을 거예요.",
            "비슷한 장르의 다른 작품들도 찾아보시는 것을 추천드립니다.",
        ),
        SuitabilityLabel.SUITABLE: (
            "전반적으로 즐겁게 읽으실 수 있는 작품입니다.",
            "일부 구간에서는 취향과 다를 수 있지만, 충분히 재미있게 읽으실 거예요.",
        ),
        SuitabilityLabel.MODERATE: (
            "호불호가 갈릴 수 있는 작품입니다.",
            "첫 몇 장을 읽어보고 계속 읽을지 결정하시는 것을 추천드립니다.",
            "열린 마음으로 접근하시면 의외의 재미를 발견할 수도 있습니다.",
        ),
        SuitabilityLabel.UNSUITABLE: (
            "취향과 맞지 않을 가능성이 높은 작품입니다.",
            "다른 장르나 스타일의 작품을 찾아보시는 것이 좋겠습니다.",
        ),
    },
    "en": {
        SuitabilityLabel.HIGHLY_SUITABLE: (
            "This work matches your taste very well!",
            "You are likely to stay immersed from beginning to end.",
            "Consider exploring other works in the same genre.",
        ),
        SuitabilityLabel.SUITABLE: (
            "You should enjoy this work overall.",
            "Some parts may differ from your taste, but it should still be a fun read.",
        ),
        SuitabilityLabel.MODERATE: (
            "Readers tend to be divided on this work.",
            "Try the first few chapters before deciding whether to continue.",
            "Approach it with an open mind and you may find unexpected enjoyment.",
        ),
        SuitabilityLabel.UNSUITABLE: (
            "This work is likely a mismatch for your taste.",
            "You may want to look for works in a different genre or style.",
        ),
    },
}

WARNINGS: dict[str, dict[SuitabilityLabel, tuple[str, ...]]] = {
    "ko": {
        SuitabilityLabel.HIGHLY_SUITABLE: (),
        SuitabilityLabel.SUITABLE: (),
        SuitabilityLabel.MODERATE: (
            "작품의 특정 요소가 기대와 다를 수 있습니다.",
            "완독하기 어려울 수 있으니 부담 없이 접근하세요.",
        ),
        SuitabilityLabel.UNSUITABLE: (
            "취향과 크게 다른 요소들이 많이 포함되어 있습니다.",
            "시간 투자 대비 만족도가 낮을 수 있습니다.",
        ),
    },
    "en": {
        SuitabilityLabel.HIGHLY_SUITABLE: (),
        SuitabilityLabel.SUITABLE: (),
        SuitabilityLabel.MODERATE: (
            "Some elements of this work may not meet your expectations.",
            "It may be hard to finish, so take it at your own pace.",
        ),
        SuitabilityLabel.UNSUITABLE: (
            "It contains many elements that differ strongly from your taste.",
            "The satisfaction may not be worth the time investment.",
        ),
    },
}


def tips_for(label: SuitabilityLabel, language: Language = "ko") -> list[str]:
    """Reading tips for a label."""
    return list(TIPS[language][label])


def warnings_for(label: SuitabilityLabel, language: Language = "ko") -> list[str]:
    """Cautions for a label. Empty for the two favourable labels."""
    return list(WARNINGS[language][label])
