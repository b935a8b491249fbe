"""
Advanced usage - Proxy, chunk size, scheduling, events
"""
import asyncio
import os
from datetime import datetime, timedelta, timezone

from tubeload import YouTubeUploader, APIConfig, ProxyConfig, PrivacyStatus, UploadError


async def main():
    config = APIConfig.for_client(
        os.environ["TUBELOAD_CLIENT_ID"],
        os.environ.get("TUBELOAD_CLIENT_SECRET"),
        chunk_size=32 * 1024 * 1024,
        proxy=ProxyConfig(url="http://proxy.example.com:8080", username="user", password="pass")
    )

    async with YouTubeUploader(config=config) as yt:
        yt.on('status', lambda status: print(f"[status] {status.value}"))
        yt.on('error', lambda error: print(f"[error] {error.step}: {error}"))

        # Authorize up front; later uploads reuse the cached token
        await yt.authorize()

        release = datetime.now(timezone.utc) + timedelta(days=1)
        request = yt.build_request(
            "trailer.mp4",
            title="Trailer",
            privacy=PrivacyStatus.PRIVATE,
            publish_at=release
        )

        try:
            result = await yt.upload(request)
        except UploadError as e:
            print(f"Failed during {e.step}: {e}")
            return

        print(f"Scheduled {result.video_id} for {release.isoformat()}")


if __name__ == "__main__":
    asyncio.run(main())
