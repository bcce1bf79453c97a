# app.py - interactive dot field
import argparse
import time

import cv2
import numpy as np

from audio import MicMeter
from inputs import HandInput, PointerInput
from loop import FrameLoop, StartGate
from params import Params, VARIANTS
from render import Backdrop, ViewTransform, draw_skeleton, draw_start_screen, draw_thumbnail

WINDOW_NAME = "Dot Field"

DEFAULT_W = 1280
DEFAULT_H = 720


def open_camera(max_index=6, required=False):
    for i in range(max_index):
        cap = cv2.VideoCapture(i)
        if cap.isOpened():
            ok, _ = cap.read()
            if ok:
                print(f"✅ Using camera index: {i}")
                return cap
        cap.release()
    if required:
        raise RuntimeError(f"❌ No working camera found (0–{max_index-1}).")
    print("⚠️  No camera found - pointer only")
    return None


def _init_tracker():
    try:
        from hands import Hands
        tracker = Hands(max_hands=2)
    except Exception as e:
        print(f"⚠️  Hand tracking unavailable: {e}")
        return None
    print("✅ MediaPipe hands ready")
    return tracker


def _start_mic(params):
    mic = MicMeter(gain=params.audio_gain)
    try:
        mic.start()
    except Exception as e:
        print(f"⚠️  Microphone unavailable: {e}")
        return None
    print("✅ Microphone level meter running")
    return mic


def _window_size(fallback):
    try:
        _, _, w, h = cv2.getWindowImageRect(WINDOW_NAME)
    except cv2.error:
        return fallback
    if w <= 0 or h <= 0:
        return fallback
    return int(w), int(h)


class App:
    def __init__(self, params, width, height, use_camera=True, use_audio=True, require_camera=False):
        self.params = params
        self.W, self.H = int(width), int(height)

        self.cap = open_camera(required=require_camera) if use_camera else None
        self.tracker = _init_tracker() if self.cap is not None else None
        self.use_audio = bool(use_audio and params.audio)
        self.mic = None

        self.loop = FrameLoop(params, self.W, self.H)
        self.loop.audio_enabled = self.use_audio
        self.pointer = PointerInput(self.W, self.H)
        self.hands = HandInput(smoothing=params.hand_smoothing)
        self.backdrop = Backdrop(self.W, self.H)
        self.mirror = self.cap is not None
        self.transform = ViewTransform(self.W, mirror_x=self.mirror)

        # audio needs a user gesture first, same as the browser autoplay rule
        self.gate = StartGate(enabled=self.use_audio)

        self.show_skeleton = True
        self.show_thumbnail = True
        self.show_backdrop = False
        self.camera_frame = None

    # ---------- input ----------

    def on_mouse(self, event, x, y, flags, param):
        sx, sy = self.transform.point(x, y)
        if event == cv2.EVENT_MOUSEMOVE:
            self.pointer.move(sx, sy)
        elif event == cv2.EVENT_LBUTTONDOWN:
            self.pointer.move(sx, sy)
            if self.gate.press() and self.use_audio:
                self.mic = _start_mic(self.params)
                self.loop.audio_enabled = self.mic is not None

    def handle_key(self, key):
        if key in (ord("r"), ord("R")):
            self.loop.regrid()
        elif key in (ord("m"), ord("M")):
            mode = self.loop.cycle_grid_mode()
            print(f"grid mode: {mode}")
        elif key in (ord("s"), ord("S")):
            self.show_skeleton = not self.show_skeleton
        elif key in (ord("t"), ord("T")):
            self.show_thumbnail = not self.show_thumbnail
        elif key in (ord("b"), ord("B")):
            self.show_backdrop = not self.show_backdrop
        elif key == ord(" "):
            self.loop.shock_at(self.pointer.pos)

    def resize(self, width, height):
        self.W, self.H = int(width), int(height)
        self.loop.resize(self.W, self.H)
        self.pointer.resize(self.W, self.H)
        # smoothed hand positions are in the old canvas pixels
        self.hands.reset()
        self.backdrop.resize(self.W, self.H)
        self.transform = ViewTransform(self.W, mirror_x=self.mirror)

    def _snapshot(self):
        level = self.mic.level if self.mic is not None else None

        if self.cap is None:
            return self.pointer.snapshot(audio_level=level)

        ok, frame = self.cap.read()
        self.camera_frame = frame if ok else None
        result = None
        if self.tracker is not None and self.camera_frame is not None:
            result = self.tracker.process(self.camera_frame)
        return self.hands.snapshot(result, self.W, self.H, audio_level=level)

    # ---------- frame ----------

    def frame(self):
        w, h = _window_size((self.W, self.H))
        if (w, h) != (self.W, self.H):
            self.resize(w, h)

        canvas = np.empty((self.H, self.W, 3), dtype=np.uint8)
        if not self.gate.running:
            draw_start_screen(canvas)
            return canvas

        snapshot = self._snapshot()
        self.loop.tick(snapshot)

        r, g, b = self.params.background
        canvas[:] = (b, g, r)
        if self.show_backdrop and self.camera_frame is not None:
            self.backdrop.update(self.camera_frame, mirror=self.mirror)
            self.backdrop.draw(canvas)

        self.loop.render(canvas, self.transform)

        if self.show_skeleton and self.hands.last_landmarks:
            draw_skeleton(canvas, self.hands.last_landmarks, self.transform)
        if self.show_thumbnail:
            draw_thumbnail(canvas, self.camera_frame, mirror=self.mirror)
        return canvas

    def close(self):
        if self.cap is not None:
            self.cap.release()
        if self.tracker is not None:
            self.tracker.close()
        if self.mic is not None:
            self.mic.stop()


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Interactive spring-damper dot field")
    ap.add_argument("--variant", default="gesture", choices=sorted(VARIANTS))
    ap.add_argument("--width", type=int, default=DEFAULT_W)
    ap.add_argument("--height", type=int, default=DEFAULT_H)
    ap.add_argument("--no-camera", action="store_true", help="pointer input only")
    ap.add_argument("--require-camera", action="store_true", help="exit if no camera opens")
    ap.add_argument("--no-audio", action="store_true")
    ap.add_argument("--fullscreen", action="store_true")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    params = Params.for_variant(args.variant)

    app = App(params, args.width, args.height,
              use_camera=not args.no_camera, use_audio=not args.no_audio,
              require_camera=args.require_camera)

    cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW_NAME, app.W, app.H)
    cv2.setMouseCallback(WINDOW_NAME, app.on_mouse)
    if args.fullscreen:
        cv2.setWindowProperty(WINDOW_NAME, cv2.WND_PROP_FULLSCREEN, cv2.WINDOW_FULLSCREEN)

    print("\n" + "=" * 60)
    print(f"🟦 DOT FIELD  ({args.variant})")
    print("=" * 60)
    print("\n📋 CONTROLS:")
    print("   R - Regrid | M - Cycle grid mode (lattice / legacy / scatter)")
    print("   S - Toggle skeleton | T - Toggle camera thumbnail | B - Toggle backdrop")
    print("   SPACE - Shockwave at pointer")
    print("   ESC - Exit")
    print("\n✋ GESTURES:")
    print("   Open hand - wide, strong push | Fist - small, soft push")
    print("   Pointing - narrow push | Clap (clap variant) - shockwave")
    print("   Creator variant: open hand spawns dots, fist is a black hole")
    print("\n" + "=" * 60 + "\n")

    prev = time.time()
    fps_smooth = 0.0

    try:
        while True:
            now = time.time()
            dt = max(1e-6, now - prev)
            prev = now
            fps = 1.0 / dt
            fps_smooth = fps if fps_smooth == 0 else 0.9 * fps_smooth + 0.1 * fps

            canvas = app.frame()

            fps_text = f"FPS: {fps_smooth:5.1f}  dots: {len(app.loop.field)}"
            cv2.putText(canvas, fps_text, (12, canvas.shape[0] - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (25, 25, 25), 3, cv2.LINE_AA)
            cv2.putText(canvas, fps_text, (12, canvas.shape[0] - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1, cv2.LINE_AA)

            cv2.imshow(WINDOW_NAME, canvas)

            key = cv2.waitKey(1) & 0xFF
            if key == 27:
                break
            if key != 255:
                app.handle_key(key)
    finally:
        app.close()
        cv2.destroyAllWindows()

    print("\n✅ Dot field shutdown complete")


if __name__ == "__main__":
    main()
