import argparse
import asyncio
import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.app.config import settings
from src.app.domain.models import EditablePostDraft, RichText
from src.app.infra.secrets.keyring_store import KeyringSecretStore
from src.app.schemas.drafts import DraftResponse, PostDraftResponse
from src.app.services.api_keys import ApiKeyResolver
from src.app.services.draft_orchestrator import DraftOrchestrator
from src.services.gemini_client import GeminiDraftClient


def _read_images(paths: list[str]) -> list[bytes]:
    return [pathlib.Path(p).read_bytes() for p in paths]


async def run_draft(post: EditablePostDraft) -> int:
    client = GeminiDraftClient()
    resolver = ApiKeyResolver(
        KeyringSecretStore(settings.SECRET_STORE_SERVICE),
        fallback_key=settings.GEMINI_API_KEY,
    )
    orchestrator = DraftOrchestrator(
        client,
        resolver,
        model_name=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
    )
    try:
        outcome = await orchestrator.generate_and_apply(post)
    finally:
        await client.aclose()

    if outcome is None or not outcome.succeeded:
        print("error:", outcome.message if outcome else "request already in flight")
        return 1

    print("--- draft")
    print(json.dumps(DraftResponse.from_domain(outcome.draft).model_dump(), indent=2, ensure_ascii=False))
    print("--- merged post")
    print(json.dumps(PostDraftResponse.from_domain(outcome.post).model_dump(), indent=2, ensure_ascii=False))
    print("highlighted:", outcome.post.recipe.highlighted_substrings())
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Quick AI draft smoke test")
    parser.add_argument("--title", default="Weekend Brunch Bowl")
    parser.add_argument(
        "--description",
        default="A cozy bowl stacked with roasted veggies and a bright herb sauce.",
    )
    parser.add_argument("--recipe", default="")
    parser.add_argument("--ingredient", action="append", default=[])
    parser.add_argument("--idea", action="append", default=[])
    parser.add_argument("--transcript", default="")
    parser.add_argument("--guidance", default="")
    parser.add_argument("--photo", action="append", default=[], help="Published photo path")
    parser.add_argument("--reference", action="append", default=[], help="Reference-only photo path")
    args = parser.parse_args()

    post = EditablePostDraft(
        title=args.title,
        description=args.description,
        recipe=RichText(text=args.recipe),
        ingredients=args.ingredient,
        photos=_read_images(args.photo),
        reference_photos=_read_images(args.reference),
        transcript=args.transcript,
        captured_ideas=args.idea,
        custom_prompt=args.guidance,
    )
    sys.exit(asyncio.run(run_draft(post)))


if __name__ == "__main__":
    main()
