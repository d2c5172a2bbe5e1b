from dataclasses import dataclass, field

DEFAULT_ROLE = "Software Engineer"
CANDIDATE_ID_PREFIX = "user_"


@dataclass(frozen=True)
class AnalysisRequest:
    """Inbound analyze-resume request."""

    resume_ref: str
    role: str = DEFAULT_ROLE
    profile_hint: str = ""
    candidate_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object], default_role: str = DEFAULT_ROLE) -> "AnalysisRequest":
        candidate_id = payload.get("candidate_id")
        if isinstance(candidate_id, str) and candidate_id.startswith(CANDIDATE_ID_PREFIX):
            candidate_id = candidate_id[len(CANDIDATE_ID_PREFIX) :]
        return cls(
            resume_ref=str(payload.get("resume_ref") or ""),
            role=str(payload.get("role") or default_role),
            profile_hint=str(payload.get("profile_hint") or ""),
            candidate_id=candidate_id if isinstance(candidate_id, str) else None,
        )


@dataclass(frozen=True)
class AnalysisResponse:
    status_code: int
    payload: dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code < 400
