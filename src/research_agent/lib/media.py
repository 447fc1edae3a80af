"""Direct media URL extraction via the ``yt-dlp`` command-line tool.

``yt-dlp -g`` prints the direct stream URL of a video page.  The call is
raced against a timeout; on expiry the process is killed and its output is
discarded, so callers only ever see a URL or ``None``.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

EXTRACT_TIMEOUT_SECONDS = 15.0

# Best single-file mp4 (video+audio) so browsers can play it directly.
YT_DLP_FORMAT = "best[ext=mp4]"


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill *proc* and reap it so no zombie is left behind."""
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    await proc.wait()


class MediaExtractor:
    """Resolve a watch-page URL into a directly playable media URL.

    Parameters
    ----------
    binary:
        Path or name of the ``yt-dlp`` executable.
    timeout:
        Seconds to wait for the subprocess before giving up.
    enabled:
        ``False`` on runtimes that cannot spawn subprocesses (serverless);
        ``resolve`` then returns ``None`` without trying.
    """

    def __init__(
        self,
        binary: str = "yt-dlp",
        timeout: float = EXTRACT_TIMEOUT_SECONDS,
        enabled: bool = True,
    ):
        self.binary = binary
        self.timeout = timeout
        self.enabled = enabled

    async def resolve(self, watch_url: str) -> str | None:
        if not self.enabled:
            logger.warning(
                "Media extraction unavailable in this environment, using embed fallback for %s",
                watch_url,
            )
            return None

        logger.info("Spawning %s for direct media URL: %s", self.binary, watch_url)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary, "-g", "-f", YT_DLP_FORMAT, watch_url,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("Could not run %s: %s", self.binary, exc)
            return None

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Timeout extracting media for %s, falling back", watch_url)
            await _terminate(proc)
            return None
        except asyncio.CancelledError:
            await _terminate(proc)
            raise

        output = stdout.decode("utf-8", errors="replace").strip()
        if proc.returncode == 0 and output:
            logger.info("Extracted direct media URL for %s", watch_url)
            return output.splitlines()[0].strip()

        err = stderr.decode("utf-8", errors="replace").strip()[:100]
        logger.warning(
            "%s failed for %s (code %s): %s",
            self.binary, watch_url, proc.returncode, err or "no output",
        )
        return None
