"""
Basic usage - Authorize and upload one video
"""
import asyncio
import os

from tubeload import YouTubeUploader


async def main():
    async with YouTubeUploader(client_id=os.environ["TUBELOAD_CLIENT_ID"]) as yt:

        # First upload opens the consent page in the browser
        result = await yt.upload(
            "clip.mp4",
            title="My first upload",
            description="Uploaded with tubeload",
            tags=["tubeload", "demo"],
            on_status=print,
            on_progress=lambda pct: print(f"Progress: {pct}%")
        )
        print(f"Uploaded: {result.watch_url}")


if __name__ == "__main__":
    asyncio.run(main())
