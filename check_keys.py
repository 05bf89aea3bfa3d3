"""Check both upstream API keys from the command line."""

import asyncio
import os
import sys
sys.path.insert(0, '.')

from dotenv import load_dotenv

from src.fakecall.config import Settings
from src.fakecall.diagnostics import Diagnostics
from src.fakecall.models import UpstreamError

load_dotenv()


async def check_keys():
    settings = Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        elevenlabs_api_key=os.getenv("ELEVENLABS_API_KEY", ""),
    )
    for name, present in settings.credential_status().items():
        print(f"{name} API key present: {present}")

    diagnostics = Diagnostics(settings)
    try:
        try:
            account = await diagnostics.check_elevenlabs_key()
            print(f"✓ ElevenLabs key valid (tier: {account.get('subscription', {}).get('tier', 'unknown')})")
        except UpstreamError as e:
            print(f"✗ ElevenLabs key rejected: {e.status} {e.message}")

        try:
            models = await diagnostics.list_gemini_models()
            print(f"✓ Gemini models usable for generation: {len(models['suggestedModels'])}")
            for name in models["suggestedModels"]:
                print(f"  - {name}")
        except UpstreamError as e:
            print(f"✗ Gemini model listing failed: {e.status} {e.message}")
    finally:
        await diagnostics.close()


if __name__ == "__main__":
    asyncio.run(check_keys())
