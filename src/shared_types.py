"""Shared enums and types for declutter."""

from enum import StrEnum


class ScanStage(StrEnum):
    IDLE = "idle"
    SCANNING = "scanning"
    RESULTS = "results"
    CLEANING = "cleaning"
    COMPLETE = "complete"


class BulkAction(StrEnum):
    DELETE = "delete"
    ARCHIVE = "archive"
    COMPRESS = "compress"


class FileCategory(StrEnum):
    OLD_FILES = "Old Files"
    SCREENSHOTS = "Screenshots"
    TEMPORARY_FILES = "Temporary Files"
    DUPLICATES = "Duplicates"
    CACHE_FILES = "Cache Files"
    OLD_BACKUPS = "Old Backups"
    APP_DATA = "App Data"


class MediaKind(StrEnum):
    DOCUMENT = "document"
    IMAGE = "image"
    CACHE = "cache"
    ARCHIVE = "archive"
    VIDEO = "video"


class BadgeCategory(StrEnum):
    MILESTONE = "milestone"
    CLEANING = "cleaning"
    CONSISTENCY = "consistency"
    ORGANIZING = "organizing"


class PredicateKind(StrEnum):
    CROSSED_THRESHOLD = "crossed_threshold"
    SINGLE_SESSION = "single_session"
    STREAK = "streak"


class PointReason(StrEnum):
    CLEAN_FILES = "clean_files"
    ORGANIZE_FOLDER = "organize_folder"
    DAILY_LOGIN = "daily_login"
    AI_ANALYSIS = "ai_analysis"
    SHARE_FOLDER = "share_folder"


class EntityKind(StrEnum):
    USER_PROGRESS = "user_progress"
    ACHIEVEMENT = "achievement"
    CLEANING_SESSION = "cleaning_session"
    CLEANING_RULE = "cleaning_rule"
    LEARNED_PREFERENCES = "learned_preferences"
    CHALLENGE = "challenge"
    CHALLENGE_PROGRESS = "challenge_progress"
