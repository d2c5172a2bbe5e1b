import json
import sys

from talentmatch.config.settings import Settings
from talentmatch.handler.analysis_handler import build_handler
from talentmatch.handler.models import AnalysisRequest
from talentmatch.logging.logger import Log

USAGE = "usage: talentmatch-analyze <resume_ref> [role] [profile_hint]"


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> handler -> analyze one stored resume -> print JSON."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE, file=sys.stderr)
        return 2

    settings = Settings()
    Log.configure(settings.log_level)
    handler = build_handler(settings)

    request = AnalysisRequest(
        resume_ref=args[0],
        role=args[1] if len(args) > 1 else settings.default_role,
        profile_hint=args[2] if len(args) > 2 else "",
    )
    response = handler.handle(request)
    print(json.dumps(response.payload, indent=2, ensure_ascii=False))
    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
