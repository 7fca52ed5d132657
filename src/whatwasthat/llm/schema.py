"""JSON schema and instructions sent to the language model."""

TIMESTAMP_PATTERN = r"^(?:\d{2}:)?[0-5]?\d:[0-5]\d$"


def _nullable(json_type: str, description: str, **extra) -> dict:
    return {
        "anyOf": [{"type": json_type, **extra}, {"type": "null"}],
        "description": description,
    }


RESPONSE_SCHEMA = {
    "name": "MediaLookupResponse",
    "strict": True,
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "status": {"type": "string", "enum": ["success", "error"]},
            "error_message": _nullable(
                "string", "Set when status is 'error', otherwise null"
            ),
            "type": {
                "anyOf": [
                    {"type": "string", "enum": ["movie", "series"]},
                    {"type": "null"},
                ],
                "description": "Content type or null on error",
            },
            "movie_title": _nullable("string", "Movie title when type='movie', else null"),
            "series_title": _nullable("string", "Series title when type='series', else null"),
            "season_number": _nullable(
                "integer", "Season when type='series', else null", minimum=1
            ),
            "episode_number": _nullable(
                "integer", "Episode when type='series', else null", minimum=1
            ),
            "episode_title": _nullable(
                "string", "Episode title when type='series', else null"
            ),
            "timestamp_success": _nullable(
                "boolean", "Whether a timestamp could be provided (null on error)"
            ),
            "timestamp": _nullable(
                "string",
                "Timestamp in HH:MM:SS or MM:SS. If only approximate is known, "
                "give best estimate in this format.",
                pattern=TIMESTAMP_PATTERN,
            ),
            "timestamp_error": _nullable(
                "string", "Present when timestamp_success is false, else null"
            ),
        },
        "required": [
            "status",
            "error_message",
            "type",
            "movie_title",
            "series_title",
            "season_number",
            "episode_number",
            "episode_title",
            "timestamp_success",
            "timestamp",
            "timestamp_error",
        ],
    },
}


SYSTEM_PROMPT = " ".join(
    [
        "You are a film and TV knowledge assistant that ALWAYS provides your best guess.",
        "Given a natural-language question about TV episodes or movies, identify the most "
        "likely piece of content.",
        "NEVER return status='error' - always make your best educated guess even if you're "
        "not 100% certain.",
        "If it is a series, return season number, episode number, and episode title.",
        "If it is a movie, return the movie title.",
        "Use your knowledge up to your training cutoff and make reasonable inferences.",
        "For recent content or episodes you might not have complete data for, provide your "
        "best estimate based on patterns, typical episode structures, and context clues.",
        "If the user appears to request a timestamp for a moment in the content, set "
        "timestamp_success accordingly.",
        "Only produce JSON that matches the provided JSON Schema, with no extra text.",
        "Always return status='success' with your best identification attempt.",
        "If you can identify the content but not the exact timestamp, return "
        "status='success' with timestamp_success=false and a descriptive timestamp_error.",
        "Even if you're unsure about exact episode numbers or details, provide your most "
        "reasonable guess rather than refusing to answer.",
    ]
)


def build_system_prompt() -> str:
    """Instruction prompt sent as the system message."""
    return SYSTEM_PROMPT
