import argparse
import logging
import time
from move_detection.config import VIDEO_PATHS, BOARD_REGION, DETECTION_SETTINGS, OUTPUT_SETTINGS
from move_detection.chess_notation import MoveInferencer
from move_detection.detection_loop import DetectionLoop
from move_detection.frame_sampling import ScreenSampler, VideoFileSampler
from move_detection.utils import BoardRect
import pandas as pd

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def detect_video_moves(video_path: str, board_rect: BoardRect, flipped: bool, interval_seconds: float) -> list:
    moves = []
    sampler = VideoFileSampler(video_path, interval_seconds)
    loop = DetectionLoop(sampler, board_rect, on_move=moves.append, flipped=flipped,
                         interval_seconds=interval_seconds)
    try:
        # no real-time pacing for recorded video, tick as fast as frames decode
        while not sampler.exhausted:
            loop.tick()
    finally:
        sampler.release()
    return moves

def run_video(args: argparse.Namespace):
    notation_generator = MoveInferencer()
    data_for_csv = []
    for video_path in args.videos or VIDEO_PATHS:
        moves = detect_video_moves(video_path, board_rect_from_args(args), args.flipped, args.interval)
        logger.info(f"{video_path}: {len(moves)} moves detected")

        video_name = video_path.split('/')[-1]
        data_for_csv.append({"row_id": video_name, "output": notation_generator.format_game_notation(moves)})

    submission_df = pd.DataFrame(data_for_csv)
    submission_df.to_csv(args.output, index=False, encoding="utf-8")
    logger.info(f"Processing complete. Results saved to {args.output}")

def run_screen(args: argparse.Namespace):
    sampler = ScreenSampler(args.monitor)
    loop = DetectionLoop(sampler, board_rect_from_args(args), flipped=args.flipped,
                         interval_seconds=args.interval)
    loop.start()
    try:
        while loop.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        loop.stop()
        sampler.close()

def board_rect_from_args(args: argparse.Namespace) -> BoardRect:
    return BoardRect(args.x, args.y, args.size)

def build_parser() -> argparse.ArgumentParser:
    board_options = argparse.ArgumentParser(add_help=False)
    board_options.add_argument("--x", type=int, default=BOARD_REGION['x'], help="Board left edge in pixels")
    board_options.add_argument("--y", type=int, default=BOARD_REGION['y'], help="Board top edge in pixels")
    board_options.add_argument("--size", type=int, default=BOARD_REGION['size'], help="Board edge length in pixels")
    board_options.add_argument("--flipped", action="store_true", help="Black is at the bottom of the board")
    board_options.add_argument("--interval", type=float, default=DETECTION_SETTINGS['interval_seconds'],
                                help="Seconds between board comparisons")

    parser = argparse.ArgumentParser(description="Detect chess moves from a board area of a screen or video.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_video = sub.add_parser("video", parents=[board_options], help="Detect moves in recorded videos and write them to CSV")
    p_video.add_argument("videos", nargs="*", help="Video files (defaults to the configured list)")
    p_video.add_argument("--output", default=OUTPUT_SETTINGS['csv_path'])
    p_video.set_defaults(func=run_video)

    p_screen = sub.add_parser("screen", parents=[board_options], help="Detect moves live from the screen until interrupted")
    p_screen.add_argument("--monitor", type=int, default=1)
    p_screen.set_defaults(func=run_screen)
    return parser

def main():
    args = build_parser().parse_args()
    args.func(args)

if __name__ == "__main__":
    main()
