"""Input validation utilities."""


def validate_name(name: str) -> str:
    """Validate a file or directory name relative to a store root.

    Nested names ("a/b/c") are allowed. Anything that could resolve outside
    the root is not.

    Args:
        name: The name to validate

    Returns:
        The name, unchanged

    Raises:
        ValueError: If the name is empty, absolute, or escapes the root
    """
    if not name:
        raise ValueError("name cannot be empty")

    if "\x00" in name or "\\" in name:
        raise ValueError(f"Invalid name {name!r}: contains forbidden characters")

    if name.startswith("/"):
        raise ValueError(f"Invalid name {name!r}: must be relative")

    if ".." in name.split("/"):
        raise ValueError(f"Invalid name {name!r}: path traversal detected")

    return name
