#!/usr/bin/env python3
"""
GameCfg Startup Script
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


async def main():
    """Initialize the database and serve the API"""
    import uvicorn
    from gamecfg.config import settings
    from gamecfg.database import init_db

    print("Initializing database...")
    await init_db()
    print("Database initialized successfully.")

    print(f"""
    GameCfg API:  http://{settings.HOST}:{settings.PORT}
     - API Documentation: http://{settings.HOST}:{settings.PORT}/docs
     - Uploads served from: {settings.UPLOADS_DIR}

    Press CTRL+C to stop
    """)

    config = uvicorn.Config(
        "gamecfg.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
