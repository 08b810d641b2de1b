# Configuration settings
VIDEO_PATHS = [
    './inputs/sample_input_video.mp4',
]

# Board area on screen (top-left corner and edge length, in pixels)
BOARD_REGION = {
    'x': 50,
    'y': 300,
    'size': 800
}

DETECTION_SETTINGS = {
    'interval_seconds': 1.0,  # Compare boards every N seconds
    'pixel_threshold': 30,  # Summed RGB difference, 0-765
    'cell_threshold': 0.15,  # Fraction of changed pixels for a square to count
    'stop_timeout_seconds': 2.0
}

OUTPUT_SETTINGS = {
    'csv_path': 'result.csv'
}
