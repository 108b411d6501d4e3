# Shared configuration and constants.

# Palette order is fixed: (colour, note) pairs.
PALETTE = (
    ("#ff3b30", "C"),  # red
    ("#ff9500", "D"),  # orange
    ("#ffcc00", "E"),  # yellow
    ("#34c759", "F"),  # green
    ("#007aff", "G"),  # blue
    ("#5856d6", "A"),  # indigo
    ("#af52de", "B"),  # purple
)

TICK_MS = 20
PROGRESS_STEP = 0.02
CUE_STOP_MS = 600

CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 800
LINE_WIDTH = 8
CANVAS_BG = "#ffffff"
CANVAS_BORDER = "#000000"

CUE_OCTAVE = 4  # C4 = 60
DEFAULT_VELOCITY = 80
SOUND_EXTENSIONS = (".mp3", ".wav")
