def sse(event: str, data: str) -> str:
    lines = (data or "").split("\n")
    body = "".join(f"data: {line}\n" for line in lines)
    return f"event: {event}\n{body}\n"
