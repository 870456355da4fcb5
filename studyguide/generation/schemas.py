from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional

from studyguide.errors import DecodeFailure


# Shared behaviour of the five stage outputs.
# FIELD_KEYS maps attribute name -> JSON key used by the prompts and by the
# merged study guide. Nested values are kept as plain JSON values.
class StageResult:
    FIELD_KEYS: ClassVar[Dict[str, str]] = {}

    @classmethod
    def from_payload(cls, payload: Any):
        if not isinstance(payload, dict):
            raise DecodeFailure(
                f"{cls.__name__}: expected a JSON object, got {type(payload).__name__}",
                preview=repr(payload)[:200],
            )
        return cls(**{attr: payload.get(key) for attr, key in cls.FIELD_KEYS.items()})

    def to_dict(self) -> Dict[str, Any]:
        out = {}
        for attr, key in self.FIELD_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out


@dataclass(frozen=True)
class CoreData(StageResult):
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    instructor: Optional[str] = None
    semester: Optional[str] = None
    credits: Optional[float] = None
    meeting_times: Optional[str] = None
    meeting_schedule: Optional[Dict[str, Any]] = None
    location: Optional[str] = None
    office_hours: Optional[str] = None
    textbook: Optional[Dict[str, Any]] = None
    week_by_week: Optional[List[Dict[str, Any]]] = None
    key_dates: Optional[List[Dict[str, Any]]] = None
    grading_breakdown: Optional[Dict[str, Any]] = None
    policies: Optional[Dict[str, Any]] = None

    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        "course_name": "courseName",
        "course_code": "courseCode",
        "instructor": "instructor",
        "semester": "semester",
        "credits": "credits",
        "meeting_times": "meetingTimes",
        "meeting_schedule": "meetingSchedule",
        "location": "location",
        "office_hours": "officeHours",
        "textbook": "textbook",
        "week_by_week": "weekByWeek",
        "key_dates": "keyDates",
        "grading_breakdown": "gradingBreakdown",
        "policies": "policies",
    }


@dataclass(frozen=True)
class AnalysisData(StageResult):
    course_overview: Optional[Dict[str, Any]] = None
    topic_analysis: Optional[List[Dict[str, Any]]] = None
    danger_zones: Optional[List[Dict[str, Any]]] = None
    professor_insights: Optional[Dict[str, Any]] = None

    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        "course_overview": "courseOverview",
        "topic_analysis": "topicAnalysis",
        "danger_zones": "dangerZones",
        "professor_insights": "professorInsights",
    }


@dataclass(frozen=True)
class ContentData(StageResult):
    weekly_study_content: Optional[List[Dict[str, Any]]] = None
    flashcard_deck: Optional[List[Dict[str, Any]]] = None
    formula_sheet: Optional[List[Dict[str, Any]]] = None

    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        "weekly_study_content": "weeklyStudyContent",
        "flashcard_deck": "flashcardDeck",
        "formula_sheet": "formulaSheet",
    }


@dataclass(frozen=True)
class StrategyData(StageResult):
    semester_strategy: Optional[Dict[str, Any]] = None
    exam_strategy: Optional[List[Dict[str, Any]]] = None
    weekly_battle_plan: Optional[List[Dict[str, Any]]] = None
    calendar_events: Optional[List[Dict[str, Any]]] = None

    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        "semester_strategy": "semesterStrategy",
        "exam_strategy": "examStrategy",
        "weekly_battle_plan": "weeklyBattlePlan",
        "calendar_events": "calendarEvents",
    }


@dataclass(frozen=True)
class PriorityData(StageResult):
    topic_priority: Optional[List[Dict[str, Any]]] = None
    must_know_list: Optional[List[str]] = None
    can_skip_list: Optional[List[str]] = None
    grade_paths: Optional[Dict[str, Any]] = None
    cram_sheet: Optional[Dict[str, Any]] = None
    weekly_focus: Optional[List[Dict[str, Any]]] = None
    exam_intel: Optional[List[Dict[str, Any]]] = None

    FIELD_KEYS: ClassVar[Dict[str, str]] = {
        "topic_priority": "topicPriority",
        "must_know_list": "mustKnowList",
        "can_skip_list": "canSkipList",
        "grade_paths": "gradePaths",
        "cram_sheet": "cramSheet",
        "weekly_focus": "weeklyFocus",
        "exam_intel": "examIntel",
    }


MERGED_RESULT_TYPES = (CoreData, AnalysisData, ContentData, StrategyData)

# Keys the study guide adds on top of the merged stage fields
GUIDE_KEYS = ("priorityData", "generatedAt")


def check_disjoint_fields() -> None:
    seen: Dict[str, str] = {key: "StudyGuide" for key in GUIDE_KEYS}
    for result_type in MERGED_RESULT_TYPES + (PriorityData,):
        for key in result_type.FIELD_KEYS.values():
            if key in seen:
                raise ValueError(
                    f"Field '{key}' declared by both {seen[key]} and {result_type.__name__}"
                )
            seen[key] = result_type.__name__


check_disjoint_fields()


@dataclass(frozen=True)
class StudyGuide:
    core: CoreData
    analysis: AnalysisData
    content: ContentData
    strategy: StrategyData
    generated_at: datetime
    priority: Optional[PriorityData] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Flat document: the union of the four required stage field sets,
        plus `priorityData` (only when present) and `generatedAt`.
        """
        guide: Dict[str, Any] = {}
        guide.update(self.core.to_dict())
        guide.update(self.analysis.to_dict())
        guide.update(self.content.to_dict())
        guide.update(self.strategy.to_dict())

        if self.priority is not None:
            guide["priorityData"] = self.priority.to_dict()

        guide["generatedAt"] = self.generated_at.isoformat()
        return guide
