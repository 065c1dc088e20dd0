"""Skill registry exceptions."""

from __future__ import annotations


class SkillEngineError(Exception):
    """Base exception for all skill engine errors.

    All custom exceptions in the engine inherit from this class, allowing
    callers to catch every engine error with a single handler.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class SkillNotFoundError(SkillEngineError):
    """Raised when a skill id is not present in the registry.

    Attributes:
        skill_id: Skill id that was looked up.
    """

    def __init__(self, skill_id: str) -> None:
        """Initialize the error.

        Args:
            skill_id: Skill id that was looked up.
        """
        self.skill_id = skill_id
        super().__init__(f"Skill '{skill_id}' is not registered")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.skill_id,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(skill_id={self.skill_id!r})"


class SkillParseError(SkillEngineError):
    """Raised when a skill source cannot be split into header and body.

    Attributes:
        origin: Source label (usually a file path).
        detail: Description of the parse error.
    """

    def __init__(self, origin: str, detail: str) -> None:
        """Initialize the error.

        Args:
            origin: Source label (usually a file path).
            detail: Description of the parse error.
        """
        self.origin = origin
        self.detail = detail
        super().__init__(f"Failed to parse skill source {origin}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.origin, self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(origin={self.origin!r}, detail={self.detail!r})"


class SkillValidationError(SkillEngineError):
    """Raised for a single skill source that fails one or more checks.

    Attributes:
        origin: Source label (usually a file path).
        errors: Every problem found in the source.
        skill_id: Skill id, when one could be determined.
    """

    def __init__(
        self,
        origin: str,
        errors: list[str],
        skill_id: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            origin: Source label (usually a file path).
            errors: Every problem found in the source.
            skill_id: Skill id, when one could be determined.
        """
        self.origin = origin
        self.errors = list(errors)
        self.skill_id = skill_id
        label = f"skill '{skill_id}'" if skill_id else "skill"
        error_list = "; ".join(self.errors)
        super().__init__(f"Validation failed for {label} at {origin}: {error_list}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.origin, self.errors, self.skill_id))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(origin={self.origin!r}, "
            f"errors={self.errors!r}, skill_id={self.skill_id!r})"
        )


class RegistryValidationError(SkillEngineError):
    """Raised when registry construction fails.

    Carries one ``SkillValidationError`` per offending source so that a
    batch of new skills can be fixed from a single report.

    Attributes:
        errors: Per-source validation errors, in source order.
    """

    def __init__(self, errors: list[SkillValidationError]) -> None:
        """Initialize the error.

        Args:
            errors: Per-source validation errors, in source order.
        """
        self.errors = list(errors)
        lines = [f"{len(self.errors)} invalid skill source(s):"]
        for error in self.errors:
            lines.append(f"  - {error.origin}: {'; '.join(error.errors)}")
        super().__init__("\n".join(lines))

    @property
    def origins(self) -> list[str]:
        """Labels of every offending source."""
        return [error.origin for error in self.errors]

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.errors,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(origins={self.origins!r})"


class TemplateRenderError(SkillEngineError):
    """Raised when merged guidance cannot be rendered with a template.

    Attributes:
        cause: Original exception raised by the template engine.
    """

    def __init__(self, cause: Exception) -> None:
        """Initialize the error.

        Args:
            cause: Original exception raised by the template engine.
        """
        self.cause = cause
        super().__init__(f"Failed to render guidance template: {cause}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.cause,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(cause={self.cause!r})"
