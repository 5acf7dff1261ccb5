"""Video downloads through yt-dlp or curl, with conversion by ffmpeg."""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import subprocess
import tempfile
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from wokkibot.security import ValidationError, validate_time_parameter, validate_url
from wokkibot.utils import capitalize_first_letter, generate_random_name

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 180.0
CONVERSION_TIMEOUT = 300.0
UPDATE_INTERVAL = 1.0
DEFAULT_BITRATE = "1M"
DEFAULT_RESOLUTION = "720"
DOWNLOADS_DIR = "downloads"
PROGRESS_BAR_WIDTH = 20

CURL_HOST_PREFIX = "https://i.ylilauta.org/"
FILE_PAGE_PREFIX = "https://ylilauta.org/file/"
APPLE_SUFFIX = "-apple.mp4"
MAX_FILESIZE_MARKER = "File is larger than max-filesize"

TIME_PARAM_PATTERN = re.compile(
    r"^(?:\d+(?:\.\d+)?|\d+:\d+(?:\.\d+)?|\d+:\d+:\d+(?:\.\d+)?)$", re.ASCII
)
ALLOWED_SCHEMES = frozenset({"http", "https"})
SHELL_DANGEROUS_CHARS = (";", "|", "$", "`", '"', "'", "\\", "\n", "\r", "\t")
TIME_DANGEROUS_CHARS = (
    ";", "|", "&", "$", "`", "$(", ")", "(", '"', "'", "\\", "\n", "\r", "\t",
)

ProgressFunc = Callable[[str], object]
PathLike = Union[str, "os.PathLike[str]"]


class DownloadError(Exception):
    """A download, conversion or validation step failed."""

    def __init__(self, message: str, title: str = "Error") -> None:
        super().__init__(message)
        self.message = message
        self.title = title


class Operation(str, Enum):
    """The kind of external command being followed."""

    DOWNLOAD = "download"
    CONVERSION = "conversion"
    CURL_DOWNLOAD = "curldownload"


@dataclass
class DownloadTask:
    """One requested download and where its files go."""

    url: str
    max_file_size: int = 10
    resolution: str = DEFAULT_RESOLUTION
    start: str = ""
    end: str = ""
    temp_dir: str = ""
    processed_path: str = ""

    def __post_init__(self) -> None:
        if not self.resolution:
            self.resolution = DEFAULT_RESOLUTION
        if not self.temp_dir:
            os.makedirs(DOWNLOADS_DIR, exist_ok=True)
            self.temp_dir = tempfile.mkdtemp(prefix="video_", dir=DOWNLOADS_DIR)
        self.temp_dir = str(self.temp_dir)
        if not self.processed_path:
            self.processed_path = os.path.join(
                self.temp_dir, f"{generate_random_name(10)}_processed.mp4"
            )


def validate_request(url: str, start: str = "", end: str = "") -> str:
    """Check the URL and the optional start and end times; return the URL."""
    try:
        validate_url(url, ALLOWED_SCHEMES, SHELL_DANGEROUS_CHARS)
    except ValidationError as exc:
        raise DownloadError(str(exc), title="Invalid URL format") from exc
    try:
        validate_time_parameter(start, TIME_PARAM_PATTERN, TIME_DANGEROUS_CHARS)
    except ValidationError as exc:
        raise DownloadError(str(exc), title="Invalid start time") from exc
    try:
        validate_time_parameter(end, TIME_PARAM_PATTERN, TIME_DANGEROUS_CHARS)
    except ValidationError as exc:
        raise DownloadError(str(exc), title="Invalid end time") from exc
    return url


def handle_special_scenarios(url: str) -> str:
    """Rewrite image board file links to their direct video URL."""
    if url.startswith(FILE_PAGE_PREFIX):
        file_id = url.split("/")[-1]
        if len(file_id) < 4:
            raise DownloadError("file ID is too short", title="File ID is too short")
        sub_path = f"{file_id[:2]}/{file_id[2:4]}"
        url = f"{CURL_HOST_PREFIX}{sub_path}/{file_id}{APPLE_SUFFIX}"

    if url.startswith(CURL_HOST_PREFIX):
        parts = url.split("/")
        filename = parts[-1]
        if not filename.endswith(APPLE_SUFFIX):
            parts[-1] = filename.removesuffix(".mp4") + APPLE_SUFFIX
            url = "/".join(parts)

    return url


def create_progress_bar(percentage: float) -> str:
    """A fixed-width bar of filled and empty blocks."""
    filled = int(percentage / 100 * PROGRESS_BAR_WIDTH)
    filled = max(0, min(PROGRESS_BAR_WIDTH, filled))
    return "█" * filled + "░" * (PROGRESS_BAR_WIDTH - filled)


def _download_template(task: DownloadTask) -> str:
    return os.path.join(task.temp_dir, "video_download.%(ext)s")


def build_ytdlp_command(task: DownloadTask) -> list[str]:
    """Arguments for downloading the task's URL with yt-dlp."""
    command = [
        "yt-dlp",
        task.url,
        "-o", _download_template(task),
        "--max-filesize", f"{task.max_file_size}M",
        "--format-sort", f"res:{task.resolution},codec:h264",
        "--merge-output-format", "mp4",
        "--cookies", "cookies.txt",
        "--progress-template", '{"progress_percentage": "%(progress._percent_str)s"}',
        "--newline",
    ]
    if task.start:
        command += ["--download-sections", f"*{task.start}-{task.end or 'inf'}"]
    return command


def build_curl_command(task: DownloadTask) -> list[str]:
    """Arguments for fetching the task's URL directly with curl."""
    return [
        "curl",
        "-L",
        "-f",
        "-#",
        "-o", _download_template(task),
        "--max-filesize", str(task.max_file_size * 1024 * 1024),
        task.url,
    ]


def build_ffmpeg_command(input_file: PathLike, output_file: PathLike) -> list[str]:
    """Arguments for re-encoding a file to H.264/AAC MP4."""
    return [
        "ffmpeg",
        "-i", str(input_file),
        "-c:v", "h264",
        "-b:v", DEFAULT_BITRATE,
        "-c:a", "aac",
        "-pix_fmt", "yuv420p",
        "-f", "mp4",
        str(output_file),
        "-progress", "pipe:1",
        "-nostats",
    ]


def _float_or_zero(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def parse_ytdlp_progress(line: str) -> Optional[float]:
    """Percentage from a yt-dlp progress template line, or None for other lines."""
    if not line.startswith("{"):
        return None
    try:
        data = json.loads(line)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    value = data.get("progress_percentage", "")
    if not isinstance(value, str):
        return None
    return _float_or_zero(value.removesuffix("%"))


def parse_curl_progress(line: str) -> Optional[float]:
    """Percentage from a curl hash-mark progress line, or None for other lines."""
    if not line.startswith("###"):
        return None
    return min(float(line.count("#")) * 2, 100.0)


def parse_ffmpeg_time(line: str) -> Optional[float]:
    """Seconds from an ffmpeg ``out_time=`` progress line, or None for other lines."""
    index = line.find("out_time=")
    if index == -1:
        return None
    parts = line[index + len("out_time="):].split(":")
    if len(parts) != 3:
        return 0.0
    hours, minutes, seconds = (_float_or_zero(part) for part in parts)
    return hours * 3600 + minutes * 60 + seconds


def _probe_stream(selector: str, path: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [
            "ffprobe",
            "-v", "error",
            "-select_streams", selector,
            "-show_entries", "stream=codec_name",
            "-of", "default=noprint_wrappers=1:nokey=1",
            path,
        ],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    )


def get_codec(path: PathLike) -> str:
    """Codec of the first video stream, or of the first audio stream if there is none."""
    target = str(path)
    try:
        result = _probe_stream("v:0", target)
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
        result = _probe_stream("a:0", target)
    except OSError as exc:
        logger.error("Error running ffprobe error=%s file=%s", exc, target)
        raise DownloadError(f"ffprobe error: {exc}, output: ") from exc
    if result.returncode != 0:
        logger.error(
            "Error running ffprobe error=exit status %s output=%s file=%s",
            result.returncode,
            result.stdout,
            target,
        )
        raise DownloadError(
            f"ffprobe error: exit status {result.returncode}, output: {result.stdout}"
        )
    return result.stdout.strip()


def get_video_duration(path: PathLike) -> float:
    """Length of a media file in seconds."""
    try:
        result = subprocess.run(
            [
                "ffprobe",
                "-v", "error",
                "-show_entries", "format=duration",
                "-of", "default=noprint_wrappers=1:nokey=1",
                str(path),
            ],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise DownloadError(f"error getting duration: {exc}") from exc
    if result.returncode != 0:
        raise DownloadError(f"error getting duration: exit status {result.returncode}")
    try:
        return float(result.stdout.strip())
    except ValueError as exc:
        raise DownloadError(f"error parsing duration: {exc}") from exc


def output_file_name(codec: str) -> str:
    """File name under which the result is attached."""
    return "audio.mp3" if codec == "mp3" else "video.mp4"


def _cleanup(temp_dir: str) -> None:
    try:
        shutil.rmtree(temp_dir)
    except OSError as exc:
        logger.error("Error while removing downloaded files: %s", exc)


class Downloader:
    """Runs the download and conversion tools and reports their progress."""

    download_timeout = DOWNLOAD_TIMEOUT
    conversion_timeout = CONVERSION_TIMEOUT
    update_interval = UPDATE_INTERVAL

    def __init__(self, progress: Optional[ProgressFunc] = None) -> None:
        self.progress = progress

    def _report(self, text: str) -> None:
        if self.progress is not None:
            self.progress(text)

    def download(self, task: DownloadTask) -> str:
        """Fetch the task's URL; return the path of the downloaded file."""
        if task.url.startswith(CURL_HOST_PREFIX):
            return self._execute(
                task, build_curl_command(task), Operation.CURL_DOWNLOAD, self.download_timeout
            )
        return self._execute(
            task, build_ytdlp_command(task), Operation.DOWNLOAD, self.download_timeout
        )

    def convert(self, task: DownloadTask, downloaded_file: PathLike) -> str:
        """Re-encode the file unless it is already H.264 or MP3; return the result path."""
        codec = get_codec(downloaded_file)
        if codec in ("h264", "mp3"):
            return str(downloaded_file)
        return self._execute(
            task,
            build_ffmpeg_command(downloaded_file, task.processed_path),
            Operation.CONVERSION,
            self.conversion_timeout,
            str(downloaded_file),
        )

    def process(self, task: DownloadTask) -> tuple[str, bytes]:
        """Download, convert and read the result; return (file name, contents).

        The task's temporary directory is removed afterwards in every case.
        """
        try:
            self._report("Starting video download...")
            downloaded = self._titled("Error while downloading video", self.download, task)
            processed = self._titled(
                "Error while converting video", self.convert, task, downloaded
            )
            try:
                data = Path(processed).read_bytes()
            except OSError as exc:
                raise DownloadError(str(exc), title="Error while attaching file") from exc
            codec = self._titled("Error while attaching file", get_codec, processed)
            return output_file_name(codec), data
        finally:
            _cleanup(task.temp_dir)

    @staticmethod
    def _titled(title: str, func: Callable, *args):
        try:
            return func(*args)
        except DownloadError as exc:
            exc.title = title
            raise

    def _execute(
        self,
        task: DownloadTask,
        command: list[str],
        operation: Operation,
        timeout: float,
        downloaded_file: Optional[str] = None,
    ) -> str:
        with tempfile.TemporaryFile() as stderr_file:
            try:
                process = subprocess.Popen(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                    text=True,
                    errors="replace",
                )
            except OSError as exc:
                raise DownloadError(f"error starting command: {exc}") from exc

            timed_out = threading.Event()

            def expire() -> None:
                timed_out.set()
                process.kill()

            timer = threading.Timer(timeout, expire)
            timer.daemon = True
            timer.start()
            with process:
                try:
                    self._follow(process.stdout, task, operation, downloaded_file)
                    returncode = process.wait()
                except BaseException:
                    process.kill()
                    raise
                finally:
                    timer.cancel()

            if returncode != 0:
                if timed_out.is_set():
                    self._report(
                        f"{capitalize_first_letter(operation.value)} canceled as it took too long"
                    )
                    raise DownloadError("operation timed out", title="Timed out")
                stderr_file.seek(0)
                message = stderr_file.read().decode("utf-8", "replace")
                if not message:
                    message = f"exit status {returncode}"
                raise DownloadError(f"{operation.value} failed: {message}")

        if operation in (Operation.DOWNLOAD, Operation.CURL_DOWNLOAD):
            files = sorted(Path(task.temp_dir).glob("video_download.*"))
            if not files:
                raise DownloadError("error finding downloaded file: no file was written")
            return str(files[0])
        return task.processed_path

    def _follow(
        self,
        stream: Iterable[str],
        task: DownloadTask,
        operation: Operation,
        downloaded_file: Optional[str],
    ) -> None:
        last_update = time.monotonic()
        last_percentage = 0.0
        total_duration: Optional[float] = None
        self._report(f"Starting video {operation.value}\n{create_progress_bar(0.0)} 0.00%")

        for raw in stream:
            line = raw.rstrip("\r\n")
            if operation is Operation.DOWNLOAD:
                if MAX_FILESIZE_MARKER in line:
                    raise DownloadError(
                        "file size exceeds the maximum allowed size for this guild. "
                        f"Maximum is {task.max_file_size}MB"
                    )
                percentage = parse_ytdlp_progress(line)
                label = "Downloading video"
            elif operation is Operation.CONVERSION:
                seconds = parse_ffmpeg_time(line)
                if seconds is None:
                    continue
                if total_duration is None:
                    try:
                        total_duration = get_video_duration(downloaded_file or "")
                    except DownloadError:
                        total_duration = 0.0
                if total_duration <= 0:
                    continue
                percentage = seconds / total_duration * 100
                label = "Converting video"
            else:
                percentage = parse_curl_progress(line)
                label = "Downloading video"

            if percentage is None:
                continue
            now = time.monotonic()
            if now - last_update >= self.update_interval and percentage != last_percentage:
                self._report(f"{label}\n{create_progress_bar(percentage)} {percentage:.2f}%")
                last_update = now
                last_percentage = percentage