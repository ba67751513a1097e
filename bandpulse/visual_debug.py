import cv2
import numpy as np

BACKGROUND_BGR = (15, 10, 10)
FONT = cv2.FONT_HERSHEY_SIMPLEX


class CanvasRenderer:
    """OpenCV window drawing the visualizers' ``DrawCommand`` lists."""

    def __init__(self, width=960, height=640, window_name="BandPulse"):
        self.width = width
        self.height = height
        self.window_name = window_name
        self.active = True
        self.show_debug = False

        self.canvas = np.zeros((height, width, 3), dtype=np.uint8)

        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)

    def clear(self):
        self.canvas[:] = BACKGROUND_BGR

    def draw(self, commands):
        for cmd in commands:
            color = self._bgr(cmd.color)
            points = [(int(round(x)), int(round(y))) for x, y in cmd.points]

            if cmd.shape == "circle":
                radius = int(round(cmd.size))
                if radius > 0:
                    cv2.circle(self.canvas, points[0], radius, color, cmd.thickness, cv2.LINE_AA)
            elif cmd.shape == "line":
                cv2.line(self.canvas, points[0], points[1], color, max(1, cmd.thickness), cv2.LINE_AA)
            elif cmd.shape == "polyline":
                pts = np.array(points, dtype=np.int32).reshape(-1, 1, 2)
                cv2.polylines(self.canvas, [pts], False, color, max(1, cmd.thickness), cv2.LINE_AA)
            elif cmd.shape == "polygon":
                pts = np.array(points, dtype=np.int32).reshape(-1, 1, 2)
                if cmd.thickness < 0:
                    cv2.fillPoly(self.canvas, [pts], color, cv2.LINE_AA)
                else:
                    cv2.polylines(self.canvas, [pts], True, color, cmd.thickness, cv2.LINE_AA)
            elif cmd.shape == "rect":
                cv2.rectangle(self.canvas, points[0], points[1], color, cmd.thickness)
            elif cmd.shape == "text":
                cv2.putText(self.canvas, cmd.text, points[0], FONT, cmd.size, color, max(1, cmd.thickness))

    def draw_debug(self, lines):
        y = self.height - 16 * len(lines) - 8
        for text in lines:
            cv2.putText(self.canvas, text, (12, y), FONT, 0.4, (220, 220, 220), 1)
            y += 16

    def render(self):
        """Show the canvas; returns the pressed key as a string, or None."""
        cv2.imshow(self.window_name, self.canvas)
        key = cv2.waitKey(1) & 0xFF
        if key == 0xFF:
            return None
        return chr(key)

    def close(self):
        if not self.active:
            return
        self.active = False
        cv2.destroyWindow(self.window_name)

    @staticmethod
    def _bgr(rgba):
        """Blend an RGBA colour over the background; OpenCV takes BGR."""
        r, g, b, a = rgba
        t = a / 255.0
        br, bg, bb = BACKGROUND_BGR[2], BACKGROUND_BGR[1], BACKGROUND_BGR[0]
        return (
            int(bb + (b - bb) * t),
            int(bg + (g - bg) * t),
            int(br + (r - br) * t),
        )
