"""Start the fake call backend."""

import sys
sys.path.insert(0, '.')

import uvicorn
from src.fakecall.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    print(f"Starting fake call backend on {settings.server_host}:{settings.server_port}")
    print(f"Conversation endpoint: http://localhost:{settings.server_port}/generate-conversation")
    uvicorn.run(
        "src.fakecall.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
    )
