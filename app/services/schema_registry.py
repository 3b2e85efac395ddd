"""
Category schema registry

Maps every category type to the ordered list of metadata fields its items
carry. The table drives both the generic item forms and the detail views.
Fitness, finance and todo categories keep their own records and have no
item fields.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple, Union


class CategoryType(str, Enum):
    """Category type enum"""
    GENERAL = "general"
    MEDIA = "media"  # movies and TV shows combined (legacy)
    MOVIES = "movies"
    TVSHOWS = "tvshows"
    MUSIC = "music"
    READING = "reading"
    GOALS = "goals"
    FITNESS = "fitness"
    GAMES = "games"
    TRAVEL = "travel"
    IDEAS = "ideas"
    CAREER = "career"
    FINANCE = "finance"
    TODOS = "todos"


class FieldKind(str, Enum):
    """Value kind of a metadata field"""
    TEXT = "text"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    DATE = "date"
    RATING = "rating"
    PROGRESS = "progress"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class FieldDescriptor:
    """One typed metadata field"""
    key: str
    label: str
    kind: FieldKind
    options: Tuple[str, ...] = ()

    def as_dict(self) -> dict:
        data = {"key": self.key, "label": self.label, "type": self.kind.value}
        if self.kind is FieldKind.SELECT:
            data["options"] = list(self.options)
        return data


def _f(key: str, label: str, kind: FieldKind, options: Tuple[str, ...] = ()) -> FieldDescriptor:
    return FieldDescriptor(key=key, label=label, kind=kind, options=options)


WATCH_STATUS = ("watched", "watching", "to_watch")
MOOD_TYPES = ("chill", "intense", "inspiring")
LEVELS = ("low", "medium", "high")

_SCREEN_FIELDS_HEAD = (
    _f("year", "Year", FieldKind.NUMBER),
    _f("genre", "Genre", FieldKind.TEXT),
    _f("status", "Status", FieldKind.SELECT, WATCH_STATUS),
    _f("rating", "Rating", FieldKind.RATING),
    _f("mood_type", "Mood", FieldKind.SELECT, MOOD_TYPES),
)

_MOVIE_FIELDS = _SCREEN_FIELDS_HEAD + (
    _f("runtime", "Runtime", FieldKind.TEXT),
    _f("director", "Director", FieldKind.TEXT),
    _f("platform", "Platform", FieldKind.TEXT),
    _f("rewatch_value", "Rewatch Value", FieldKind.SELECT, LEVELS),
    _f("notes", "Notes", FieldKind.TEXTAREA),
)

CATEGORY_SCHEMAS: Dict[CategoryType, Tuple[FieldDescriptor, ...]] = {
    CategoryType.GENERAL: (),
    CategoryType.MEDIA: _MOVIE_FIELDS,
    CategoryType.MOVIES: _MOVIE_FIELDS,
    CategoryType.TVSHOWS: _SCREEN_FIELDS_HEAD + (
        _f("seasons", "Seasons", FieldKind.NUMBER),
        _f("episodes", "Episodes", FieldKind.NUMBER),
        _f("creator", "Creator", FieldKind.TEXT),
        _f("platform", "Platform", FieldKind.TEXT),
        _f("rewatch_value", "Rewatch Value", FieldKind.SELECT, LEVELS),
        _f("notes", "Notes", FieldKind.TEXTAREA),
    ),
    CategoryType.MUSIC: (
        _f("artist", "Artist", FieldKind.TEXT),
        _f("year", "Year", FieldKind.NUMBER),
        _f("genre", "Genre", FieldKind.TEXT),
        _f("rating", "Rating", FieldKind.RATING),
        _f("replay_value", "Replay Value", FieldKind.SELECT, LEVELS),
        _f("era", "Era / Life Phase", FieldKind.TEXT),
        _f("format", "Format", FieldKind.SELECT, ("streaming", "vinyl", "cd")),
        _f("notes", "Personal Meaning", FieldKind.TEXTAREA),
    ),
    CategoryType.READING: (
        _f("author", "Author / Host", FieldKind.TEXT),
        _f("status", "Status", FieldKind.SELECT, ("reading", "finished", "planned")),
        _f("rating", "Rating", FieldKind.RATING),
        _f("difficulty", "Difficulty", FieldKind.SELECT, ("easy", "medium", "hard")),
        _f("purpose", "Purpose", FieldKind.SELECT, ("learning", "leisure", "mindset")),
        _f("format", "Format", FieldKind.SELECT, ("audio", "physical", "pdf")),
        _f("revisit_potential", "Revisit Potential", FieldKind.SELECT, LEVELS),
        _f("notes", "Key Ideas / Notes", FieldKind.TEXTAREA),
    ),
    CategoryType.GOALS: (
        _f("category", "Category", FieldKind.SELECT, ("health", "career", "personal", "financial")),
        _f("deadline", "Deadline", FieldKind.DATE),
        _f("progress", "Progress %", FieldKind.PROGRESS),
        _f("why_it_matters", "Why It Matters", FieldKind.TEXTAREA),
        _f("success_definition", "Success Definition", FieldKind.TEXTAREA),
        _f("motivation_level", "Motivation Level", FieldKind.RATING),
        _f("notes", "Notes", FieldKind.TEXTAREA),
    ),
    CategoryType.FITNESS: (),
    CategoryType.GAMES: (
        _f("platform", "Platform", FieldKind.TEXT),
        _f("status", "Status", FieldKind.SELECT, ("playing", "completed", "backlog", "dropped")),
        _f("genre", "Genre", FieldKind.TEXT),
        _f("hours_played", "Hours Played", FieldKind.NUMBER),
        _f("rating", "Rating", FieldKind.RATING),
        _f("completion_percentage", "Completion %", FieldKind.PROGRESS),
        _f("difficulty", "Difficulty", FieldKind.SELECT, ("easy", "medium", "hard", "extreme")),
        _f("multiplayer", "Multiplayer", FieldKind.CHECKBOX),
        _f("notes", "Favorite Moments", FieldKind.TEXTAREA),
    ),
    CategoryType.TRAVEL: (
        _f("status", "Status", FieldKind.SELECT, ("visited", "planned")),
        _f("dates", "Dates", FieldKind.TEXT),
        _f("budget", "Budget", FieldKind.NUMBER),
        _f("accommodation", "Accommodation", FieldKind.TEXT),
        _f("rating", "Rating", FieldKind.RATING),
        _f("purpose", "Purpose", FieldKind.SELECT, ("relax", "culture", "adventure", "business")),
        _f("lessons", "Lessons / Mistakes", FieldKind.TEXTAREA),
        _f("notes", "Highlights", FieldKind.TEXTAREA),
    ),
    CategoryType.IDEAS: (
        _f("source", "Source of Idea", FieldKind.TEXT),
        _f("problem_solved", "Problem It Solves", FieldKind.TEXTAREA),
        _f("potential_impact", "Potential Impact", FieldKind.SELECT, LEVELS),
        _f("time_estimate", "Time Estimate", FieldKind.TEXT),
        _f("excitement_level", "Excitement Level", FieldKind.RATING),
        _f("next_action", "Next Action", FieldKind.TEXT),
        _f("notes", "Notes", FieldKind.TEXTAREA),
    ),
    CategoryType.CAREER: (
        _f("skills_learned", "Skills Learned", FieldKind.TEXT),
        _f("courses", "Courses", FieldKind.TEXT),
        _f("tools_used", "Tools Used", FieldKind.TEXT),
        _f("certifications", "Certifications", FieldKind.TEXT),
        _f("feedback", "Feedback Received", FieldKind.TEXTAREA),
        _f("career_direction", "Career Direction Notes", FieldKind.TEXTAREA),
    ),
    CategoryType.FINANCE: (),
    CategoryType.TODOS: (),
}

# Top-N list categories where items carry a 1-100 rank
RANKED_CATEGORY_TYPES: Set[CategoryType] = {
    CategoryType.MOVIES,
    CategoryType.TVSHOWS,
    CategoryType.MUSIC,
    CategoryType.READING,
    CategoryType.MEDIA,
}

# Categories backed by their own record kinds instead of items
DEDICATED_CATEGORY_TYPES: Set[CategoryType] = {
    CategoryType.FITNESS,
    CategoryType.FINANCE,
    CategoryType.TODOS,
}

CategoryTypeLike = Union[CategoryType, str, None]


def parse_category_type(category_type: CategoryTypeLike) -> Optional[CategoryType]:
    """Return the enum member for a type tag, or None if unrecognized"""
    if isinstance(category_type, CategoryType):
        return category_type
    if not category_type:
        return None
    try:
        return CategoryType(category_type)
    except ValueError:
        return None


def lookup(category_type: CategoryTypeLike) -> List[FieldDescriptor]:
    """
    Get the ordered field list for a category type

    Unknown or missing types resolve to an empty list, as do the
    dedicated fitness, finance and todos types.
    """
    parsed = parse_category_type(category_type)
    if parsed is None:
        return []
    return list(CATEGORY_SCHEMAS[parsed])


def field_keys(category_type: CategoryTypeLike) -> Set[str]:
    return {field.key for field in lookup(category_type)}


def get_field(category_type: CategoryTypeLike, key: str) -> Optional[FieldDescriptor]:
    for field in lookup(category_type):
        if field.key == key:
            return field
    return None


def supports_rank(category_type: CategoryTypeLike) -> bool:
    """Check if items of this category type can be ranked"""
    return parse_category_type(category_type) in RANKED_CATEGORY_TYPES


def uses_items(category_type: CategoryTypeLike) -> bool:
    """Check if the category holds generic image items"""
    return parse_category_type(category_type) not in DEDICATED_CATEGORY_TYPES
