import logging
import os
from datetime import datetime
from typing import Optional

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

class VideoRecorder:
    RECORDINGS_DIR = "recordings"

    def __init__(self, active: bool = False, output_file: Optional[str] = None, fps: int = 30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = self.default_filename()

    @classmethod
    def default_filename(cls, prefix: str = "search") -> str:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fname = f"{prefix}_{ts}.mp4"
        if os.path.isdir(cls.RECORDINGS_DIR):
            return os.path.join(cls.RECORDINGS_DIR, fname)
        return fname

    def start(self, output_file: Optional[str] = None):
        if self.active:
            return
        self.output_file = output_file or self.default_filename()
        self.frame_count = 0
        self.active = True

    @staticmethod
    def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
        # surfarray gives (width, height, 3) RGB, OpenCV wants (height, width, 3) BGR
        view = pygame.surfarray.array3d(surface)
        frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        size = surface.get_size()
        if self.writer is None:
            self.frame_size = size
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")
        elif size != self.frame_size:
            # Window was resized mid-recording; keep the writer's frame size
            surface = pygame.transform.scale(surface, self.frame_size)

        self.writer.write(self.surface_to_frame(surface))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
        self.active = False
