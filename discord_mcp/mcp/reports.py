"""
Markdown report templating for the generate_report tool.
The report only packages the transcript; the analysis is left to the calling agent.
"""
from typing import List

from ..models.discord_models import MessageInfo

EMPTY_RANGE = "N/A"


def format_transcript_line(message: MessageInfo) -> str:
    return f"[{message.timestamp}] {message.author}: {message.content}"


def build_report(channel_name: str, topic: str, messages: List[MessageInfo]) -> str:
    """Build the report document

    Args:
        channel_name: Display name (or raw id) of the analyzed channel
        topic: Topic or question to analyze
        messages: Messages newest-first, as returned by read_messages
    """
    chronological = list(reversed(messages))
    transcript = "\n".join(format_transcript_line(m) for m in chronological)

    if chronological:
        time_range = f"{chronological[0].timestamp} to {chronological[-1].timestamp}"
    else:
        time_range = EMPTY_RANGE

    count = len(chronological)
    return f"""# Report: {topic}

## Source
- **Channel**: #{channel_name}
- **Messages Analyzed**: {count}
- **Time Range**: {time_range}

## Topic
{topic}

## Messages Data
```
{transcript}
```

## Analysis
Based on the {count} messages above, analyze the topic "{topic}" and provide insights.
"""
