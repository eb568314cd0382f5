"""Language tables shared by the Piston and Judge0 engines."""

# Judge0 language ids, keyed by upper-case alias
JUDGE0_LANGUAGE_IDS: dict[str, int] = {
    "C": 50,
    "C++": 54,
    "CPP": 54,
    "GO": 60,
    "JAVA": 62,
    "JAVASCRIPT": 63,
    "JS": 63,
    "PYTHON": 71,
    "RUST": 73,
    "TYPESCRIPT": 74,
    "TS": 74,
}

LANGUAGE_NAMES: dict[int, str] = {
    50: "C",
    54: "C++",
    60: "Go",
    62: "Java",
    63: "JavaScript",
    71: "Python",
    73: "Rust",
    74: "TypeScript",
}

# Judge0 id → Piston language key
PISTON_KEYS: dict[int, str] = {
    50: "c",
    54: "cpp",
    60: "go",
    62: "java",
    63: "javascript",
    71: "python",
    73: "rust",
    74: "typescript",
}

# Piston key → (language, pinned version)
PISTON_RUNTIMES: dict[str, tuple[str, str]] = {
    "c": ("c", "10.2.0"),
    "javascript": ("javascript", "18.15.0"),
    "python": ("python", "3.10.0"),
    "java": ("java", "15.0.2"),
    "cpp": ("cpp", "10.2.0"),
    "go": ("go", "1.16.2"),
    "rust": ("rust", "1.68.2"),
    "typescript": ("typescript", "5.0.3"),
}

FILE_EXTENSIONS: dict[str, str] = {
    "c": "c",
    "javascript": "js",
    "python": "py",
    "java": "java",
    "cpp": "cpp",
    "go": "go",
    "rust": "rs",
    "typescript": "ts",
}


def get_judge0_language_id(language: str | None) -> int | None:
    return JUDGE0_LANGUAGE_IDS.get(str(language or "").strip().upper())


def get_language_name(language_id: int) -> str:
    return LANGUAGE_NAMES.get(language_id, "Unknown")


def get_piston_language(language_id: int) -> str:
    return PISTON_KEYS.get(language_id, "javascript")


def get_piston_config(language_id: int) -> tuple[str, str]:
    """Return the pinned ``(language, version)`` Piston runtime for an id."""
    return PISTON_RUNTIMES.get(get_piston_language(language_id), PISTON_RUNTIMES["javascript"])


def get_file_extension(language: str) -> str:
    return FILE_EXTENSIONS.get(language, "txt")


def list_languages() -> list[dict]:
    languages = []
    for language_id, name in sorted(LANGUAGE_NAMES.items()):
        piston_lang, version = get_piston_config(language_id)
        languages.append({
            "id": language_id,
            "name": name,
            "piston": {"language": piston_lang, "version": version},
            "extension": get_file_extension(piston_lang),
        })
    return languages
