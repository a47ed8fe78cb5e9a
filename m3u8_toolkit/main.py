from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from .downloader.collector import PlaylistCollector
from .errors import PlaylistError
from .models import MasterPlaylist, MediaPlaylist, PlaylistCollection
from .parser.m3u8_builder import build_playlist
from .playlist.live_window import trim_live_window
from .playlist.variant_filter import NO_MATCH, profile_matches, quality_levels, select_variant
from .utils.file_utils import build_playlist_filename, ensure_directory, write_text
from .utils.http_client import FetchError, HttpClient

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect HLS playlists and the variants they reference.")
    parser.add_argument("url", nargs="?", default=_env_str("PLAYLIST_URL"), help="Master or media playlist URL")
    parser.add_argument("--timeout", type=float, default=_env_float("FETCH_TIMEOUT") or 10.0, help="Per-request timeout in seconds")
    parser.add_argument(
        "--video-profile",
        default=_env_str("VIDEO_PROFILE") or "^Base$",
        help="Regular expression a preferred variant's H.264 profile must match",
    )
    parser.add_argument(
        "--audio-profile",
        default=_env_str("AUDIO_PROFILE") or "AAC",
        help="Regular expression a preferred variant's audio profile must match",
    )
    parser.add_argument(
        "--start-time",
        type=int,
        default=_env_int("START_TIME_MS"),
        help="Trim media playlists to the segment playing at this time (milliseconds)",
    )
    parser.add_argument(
        "--max-segments",
        type=int,
        default=_env_int("MAX_SEGMENTS") or 0,
        help="Maximum segments kept when trimming (0 keeps all)",
    )
    parser.add_argument("--output-dir", default=_env_str("OUTPUT_DIR"), help="Directory to write rebuilt playlists to")
    parser.add_argument("--verbose", action="store_true", default=_env_bool("VERBOSE"), help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def print_variants(master: MasterPlaylist) -> None:
    if not master.variants:
        logging.info("No variants listed in %s.", master.url)
        return
    logging.info("%-5s | %-10s | %-10s | %-20s | %s", "Index", "Bandwidth", "Quality", "Video", "Audio")
    logging.info("%s", "-" * 80)
    for level, variant in zip(quality_levels(master), master.variants):
        video = " ".join(part for part in (variant.video.codec, variant.video.profile, variant.video.level) if part)
        logging.info(
            "%-5s | %-10s | %-10s | %-20s | %s",
            level.index,
            level.bitrate,
            level.name or "-",
            video or "-",
            variant.audio.profile or variant.audio.codec or "-",
        )


def print_media(playlist: MediaPlaylist) -> None:
    logging.info(
        "%s | %s | seq=%s | %s segments | target=%sms | total=%sms",
        playlist.url,
        playlist.kind.value,
        playlist.media_sequence,
        len(playlist.segments),
        playlist.target_duration,
        playlist.total_duration,
    )


def report(args: argparse.Namespace, collection: PlaylistCollection) -> list[MediaPlaylist]:
    for master in collection.master_playlists:
        print_variants(master)
        index = select_variant(
            master.variants,
            profile_matches(args.video_profile),
            profile_matches(args.audio_profile),
        )
        if index == NO_MATCH:
            logging.warning("No variant of %s matches the requested profiles.", master.url)
        else:
            logging.info("Preferred variant: #%s %s", index, master.variants[index].url)

    media = list(collection.media_playlists)
    if args.start_time is not None:
        media = [trim_live_window(playlist, args.start_time, args.max_segments) for playlist in media]
    for playlist in media:
        print_media(playlist)
    return media


def write_playlists(output_dir: str, collection: PlaylistCollection, media: list[MediaPlaylist]) -> None:
    ensure_directory(output_dir)
    playlists = [*collection.master_playlists, *media]
    for index, playlist in enumerate(playlists, start=1):
        filename = build_playlist_filename(output_dir, playlist.url, index)
        try:
            write_text(filename, build_playlist(playlist))
        except PlaylistError as exc:
            logging.error("Cannot rebuild %s: %s", playlist.url, exc)
            continue
        logging.info("Saved %s", filename)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    if not args.url:
        logging.error("A playlist URL (or PLAYLIST_URL) must be provided.")
        return 2

    with HttpClient(timeout=args.timeout) as http_client:
        collector = PlaylistCollector(http_client)
        try:
            collection = collector.collect_sync(args.url)
        except FetchError as exc:
            logging.error("Failed to fetch %s (status %s): %s", exc.url, exc.status_code, exc)
            return 1
        except PlaylistError as exc:
            logging.error("Invalid playlist: %s", exc)
            return 1

    media = report(args, collection)
    if args.output_dir:
        write_playlists(args.output_dir, collection, media)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
