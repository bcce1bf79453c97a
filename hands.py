import cv2

import mediapipe as mp


class Hands:
    """
    MediaPipe hands wrapper.

    Returns:
      {"hands": [hand0, hand1, ...]}   or None when nothing is detected

    Each hand dict contains:
      - "landmarks": [(x,y)*21] normalised 0..1 camera coords
      - "label": "Left" / "Right" (MediaPipe handedness, used as a stable id)
    """

    def __init__(self, max_hands=2, det_conf=0.5, track_conf=0.5):
        self.max_hands = max_hands
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_hands,
            model_complexity=0,
            min_detection_confidence=float(det_conf),
            min_tracking_confidence=float(track_conf),
        )

    def process(self, frame_bgr):
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        # Fixes NORM_RECT without IMAGE_DIMENSIONS warning
        self.hands._image_width, self.hands._image_height = frame_bgr.shape[1], frame_bgr.shape[0]  # type: ignore[attr-defined]

        res = self.hands.process(frame_rgb)

        if not res.multi_hand_landmarks:
            return None

        labels = []
        if res.multi_handedness:
            labels = [h.classification[0].label for h in res.multi_handedness]

        out = {"hands": []}
        for i, hand_lms in enumerate(res.multi_hand_landmarks):
            pts = [(lm.x, lm.y) for lm in hand_lms.landmark]
            label = labels[i] if i < len(labels) else f"hand{i}"
            out["hands"].append({"landmarks": pts, "label": label})

        return out

    def close(self):
        self.hands.close()
