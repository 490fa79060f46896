# constants.py
from pathlib import Path

# Defaults
BASE_DIR = Path.cwd()
LOG_DIR = BASE_DIR / "logs"
ARCHIVES_DIR = BASE_DIR / "archives"

CLICK_BUDGET = 10
TIMEOUT_MINUTES = 10
DEFAULT_DEVICE = "win10"
DEFAULT_CATEGORY = "uncategorized"
INSTRUMENTATION_DOMAIN = "SE"

SCROLL_TIMES = 10
SCROLL_DISTANCE = 500

# Delays in milliseconds
SCROLL_DELAY = 500
SETTLE_DELAY = 2000
CLICK_DELAY = 500
MOUSE_DOWN_DELAY = 500
NAVIGATION_SCREENSHOT_DELAY = 5000

FORENSIC_LOG_NAME = "forensics.log"
CDP_LOG_NAME = "cdp.log"
CRAWLER_LOG_NAME = "crawler.log"

ANCHOR_TAG = "A"
IGNORED_TAGS = frozenset(["#text", "STRONG", "UL", "LI"])

MOUSE_EVENT_PREFIXES = ("mouse", "pointer", "touch")
MOUSE_EVENTS = frozenset(["contextmenu"])

# Instrumentation events recorded for every attached page
HOOKS = (
    "DidInsertDOMNode",
    "CharacterDataModified",
    "DidAddEventListener",
    "DidRemoveEventListener",
    "DidAddUserCallback",
    "DidRemoveUserCallback",
    "DidCallFunction",
    "DidExecuteScript",
    "DidInvalidateStyleAttr",
    "DidModifyDOMAttr",
    "DidUpdateComputedStyle",
    "DidUserCallback",
    "DidCompileScript",
    "FrameAttachedToParent",
    "FrameRequestedNavigation",
    "WillCallFunction",
    "WillCommitLoad",
    "WillExecuteScript",
    "WillRemoveDOMNode",
    "WillSendRequest",
    "WillUserCallback",
    "WindowOpen",
    "DidRemoveDOMAttr",
)

CHROME_ARGS = [
    "--no-sandbox",
    "--enable-logging",
    "--vmodule=forensic_recorder=7",
]

_DESKTOP_VIEWPORT = {"width": 1920, "height": 1080}

DEVICES = {
    "win10": {
        "viewport": _DESKTOP_VIEWPORT,
        "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/88.0.4324.150 Safari/537.36",
    },
    "macos": {
        "viewport": _DESKTOP_VIEWPORT,
        "user_agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 11_2_1) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/88.0.4324.150 Safari/537.36",
    },
    "linux": {
        "viewport": _DESKTOP_VIEWPORT,
        "user_agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/88.0.4324.150 Safari/537.36",
    },
    "iphone": {
        "viewport": {"width": 375, "height": 812},
        "user_agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 13_7 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/13.1 Mobile/15E148 Safari/604.1",
        "device_scale_factor": 3,
        "is_mobile": True,
        "has_touch": True,
    },
    "ipad": {
        "viewport": {"width": 1024, "height": 1366},
        "user_agent": "Mozilla/5.0 (iPad; CPU OS 11_0 like Mac OS X) AppleWebKit/604.1.34 (KHTML, like Gecko) Version/11.0 Mobile/15A5341f Safari/604.1",
        "device_scale_factor": 2,
        "is_mobile": True,
        "has_touch": True,
    },
}

# Draws a fading dot wherever the mouse goes down (debug runs only)
CLICK_EFFECT_SCRIPT = """
(() => {
  if (window.__clickEffectInstalled) return;
  window.__clickEffectInstalled = true;
  document.addEventListener('mousedown', (e) => {
    const dot = document.createElement('div');
    dot.style.cssText = 'position:fixed;z-index:2147483647;pointer-events:none;' +
      'width:20px;height:20px;margin:-10px 0 0 -10px;border-radius:50%;' +
      'background:rgba(255,0,0,0.6);transition:opacity 1s;' +
      'left:' + e.clientX + 'px;top:' + e.clientY + 'px;';
    document.documentElement.appendChild(dot);
    setTimeout(() => { dot.style.opacity = '0'; }, 50);
    setTimeout(() => { dot.remove(); }, 1100);
  }, true);
})();
"""
