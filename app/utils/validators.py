import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

GOOGLE_DRIVE_PATTERN = re.compile(
    r"^https://(drive|docs|sheets|slides|forms|sites|classroom|photos)\.google\.com/.*"
)

YOUTUBE_PATTERN = re.compile(
    r"^https://(www\.)?youtube\.com/watch\?v=.*|^https://youtu\.be/.*"
)


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_PATTERN.match(email))


def is_google_drive_url(url: str) -> bool:
    return bool(url and GOOGLE_DRIVE_PATTERN.match(url))


def is_youtube_url(url: str) -> bool:
    return bool(url and YOUTUBE_PATTERN.match(url))
