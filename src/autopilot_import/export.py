"""Serialize imported chat histories to JSON-friendly dicts, JSON and Markdown."""

import json

from .core import ChatHistoryItem, ConversationMessage, ImportedFile


def message_to_dict(msg: ConversationMessage) -> dict:
    """Convert a ConversationMessage to a JSON-serializable dict."""
    return {
        "id": msg.id,
        "role": msg.role,
        "content": msg.content,
        "createdAt": msg.created_at.isoformat() if msg.created_at else None,
    }


def history_to_dict(item: ChatHistoryItem) -> dict:
    """Convert a ChatHistoryItem to a JSON-serializable dict."""
    return {
        "id": item.id,
        "urlId": item.url_id,
        "description": item.description,
        "messages": [message_to_dict(m) for m in item.messages],
        "timestamp": item.timestamp,
    }


def files_to_dict(project_name: str, files: list[ImportedFile]) -> dict:
    """Shape of the import endpoint's success response."""
    return {
        "project_name": project_name,
        "files": [{"name": f.path, "content": f.content} for f in files],
    }


def messages_to_json(messages: list[ConversationMessage]) -> str:
    return json.dumps([message_to_dict(m) for m in messages], indent=2, ensure_ascii=False)


def history_to_json(item: ChatHistoryItem) -> str:
    return json.dumps(history_to_dict(item), indent=2, ensure_ascii=False)


def messages_to_markdown(title: str, messages: list[ConversationMessage]) -> str:
    """Render a message list as Markdown for reading."""
    lines = [f"# {title}", "", f"**Messages:** {len(messages)}", "", "---", ""]

    for msg in messages:
        ts = ""
        if msg.created_at:
            ts = f" ({msg.created_at.strftime('%Y-%m-%d %H:%M')})"
        lines.append(f"## {msg.role.capitalize()}{ts}")
        lines.append("")
        lines.append(msg.content)
        lines.extend(["", "---", ""])

    return "\n".join(lines)


def history_to_markdown(item: ChatHistoryItem) -> str:
    return messages_to_markdown(item.description, item.messages)
