"""Practice session schemas."""

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

from duo.schemas.languages import LanguagePair

# Exercise types the web client advertises when it asks for a practice session
CHALLENGE_TYPES = (
    "assist",
    "characterIntro",
    "characterMatch",
    "characterPuzzle",
    "characterSelect",
    "characterTrace",
    "characterWrite",
    "completeReverseTranslation",
    "definition",
    "dialogue",
    "extendedMatch",
    "extendedListenMatch",
    "form",
    "freeResponse",
    "gapFill",
    "judge",
    "listen",
    "listenComplete",
    "listenMatch",
    "match",
    "name",
    "listenComprehension",
    "listenIsolation",
    "listenSpeak",
    "listenTap",
    "orderTapComplete",
    "partialListen",
    "partialReverseTranslate",
    "patternTapComplete",
    "radioBinary",
    "radioImageSelect",
    "radioListenMatch",
    "radioListenRecognize",
    "radioSelect",
    "readComprehension",
    "reverseAssist",
    "sameDifferent",
    "select",
    "selectPronunciation",
    "selectTranscription",
    "svgPuzzle",
    "syllableTap",
    "syllableListenTap",
    "speak",
    "tapCloze",
    "tapClozeTable",
    "tapComplete",
    "tapCompleteTable",
    "tapDescribe",
    "translate",
    "transliterate",
    "transliterationAssist",
    "typeCloze",
    "typeClozeTable",
    "typeComplete",
    "typeCompleteTable",
    "writeComprehension",
)

LESSON_DURATION_SECONDS = 60.0


class SessionRequest(BaseModel):
    """Create session request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    challenge_types: List[str] = Field(
        default_factory=lambda: list(CHALLENGE_TYPES), alias="challengeTypes"
    )
    from_language: str = Field(alias="fromLanguage")
    is_final_level: bool = Field(False, alias="isFinalLevel")
    is_v2: bool = Field(True, alias="isV2")
    juicy: bool = True
    learning_language: str = Field(alias="learningLanguage")
    smart_tips_version: int = Field(1, alias="smartTipsVersion")
    type: str = "GLOBAL_PRACTICE"

    @classmethod
    def for_languages(cls, languages: LanguagePair) -> "SessionRequest":
        return cls(
            from_language=languages.from_language,
            learning_language=languages.learning_language,
        )

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Session(BaseModel):
    """Session as returned by the API.

    Only ``id`` is interpreted; all other fields are kept so they can be
    sent back untouched when the session is completed.
    """

    model_config = ConfigDict(extra="allow")

    id: Union[StrictInt, StrictStr]

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, value):
        if value == "":
            raise ValueError("session id is empty")
        return value

    @property
    def path_id(self) -> str:
        """The id as it appears in the session URL."""
        return str(self.id)


class SessionCompletion(BaseModel):
    """Fields overlaid on a session to report it as a flawless finish."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hearts_left: int = Field(3, alias="heartsLeft")
    start_time: float = Field(alias="startTime")
    end_time: float = Field(alias="endTime")
    enable_bonus_points: bool = Field(True, alias="enableBonusPoints")
    failed: bool = False
    max_in_lesson_streak: int = Field(10, alias="maxInLessonStreak")
    should_learn_things: bool = Field(True, alias="shouldLearnThings")

    @classmethod
    def ending_at(
        cls, end_time: float, duration: float = LESSON_DURATION_SECONDS
    ) -> "SessionCompletion":
        """Completion for a lesson that started ``duration`` seconds earlier."""
        return cls(start_time=end_time - duration, end_time=end_time)

    def apply_to(self, session: Session) -> Dict[str, Any]:
        """Merge onto the session; completion fields win on key clashes."""
        body = session.model_dump()
        body.update(self.model_dump(by_alias=True))
        return body


class SessionResult(BaseModel):
    """Completion response."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    xp_gain: int = Field(0, alias="xpGain")

    @field_validator("xp_gain", mode="before")
    @classmethod
    def missing_xp_is_zero(cls, value):
        return 0 if value is None else value
