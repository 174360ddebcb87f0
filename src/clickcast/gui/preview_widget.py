# -*- coding: utf-8 -*-
"""Slide preview with draggable mouse-cursor markers."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen, QPixmap
from PyQt6.QtWidgets import QSizePolicy, QWidget

from clickcast.constants import CURSOR_IMAGE, MOUSE_CURSOR_TARGET
from clickcast.models.presentation import Action
from clickcast.pipeline.builder import RESOURCES_DIR


class PreviewWidget(QWidget):
    """Paint the selected slide scaled to fit, plus its cursor actions.

    Dragging a cursor emits ``action_moved`` for every intermediate position
    and ``action_committed`` once on release, in canvas fractions.
    """

    action_selected = pyqtSignal(int)
    action_moved = pyqtSignal(int, float, float)
    action_committed = pyqtSignal(int, float, float)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 240)
        self._pixmap = QPixmap()
        self._actions: list[Action] = []
        self._selected_action = -1
        self._dragging = -1
        self._last_fraction = (0.0, 0.0)
        self._cursor_icon = QPixmap(str(RESOURCES_DIR / CURSOR_IMAGE))

    def show_slide(self, image_path: Path | None, actions: list[Action]) -> None:
        self._pixmap = QPixmap(str(image_path)) if image_path is not None else QPixmap()
        self._actions = actions
        self._selected_action = -1
        self._dragging = -1
        self.update()

    def clear(self) -> None:
        self.show_slide(None, [])

    def set_selected_action(self, index: int) -> None:
        self._selected_action = index
        self.update()

    def _image_rect(self) -> QRectF:
        if self._pixmap.isNull():
            return QRectF()
        scale = min(self.width() / self._pixmap.width(), self.height() / self._pixmap.height())
        width = self._pixmap.width() * scale
        height = self._pixmap.height() * scale
        return QRectF((self.width() - width) / 2, (self.height() - height) / 2, width, height)

    def _marker_rect(self, action: Action, image_rect: QRectF) -> QRectF:
        x = image_rect.left() + action.final_abs * image_rect.width()
        y = image_rect.top() + action.final_ord * image_rect.height()
        return QRectF(x, y, self._cursor_icon.width(), self._cursor_icon.height())

    def _fraction_at(self, point: QPointF) -> tuple[float, float]:
        rect = self._image_rect()
        if rect.isEmpty():
            return 0.0, 0.0
        return (point.x() - rect.left()) / rect.width(), (point.y() - rect.top()) / rect.height()

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(40, 40, 40))
        rect = self._image_rect()
        if not rect.isEmpty():
            painter.drawPixmap(rect.toRect(), self._pixmap)
            for index, action in enumerate(self._actions):
                if action.target != MOUSE_CURSOR_TARGET:
                    continue
                marker = self._marker_rect(action, rect)
                painter.drawPixmap(marker.topLeft(), self._cursor_icon)
                if index == self._selected_action:
                    painter.setPen(QPen(QColor(255, 80, 80), 2))
                    painter.drawRect(marker.adjusted(-3, -3, 3, 3))
        painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        rect = self._image_rect()
        for index, action in enumerate(self._actions):
            if self._marker_rect(action, rect).contains(event.position()):
                self._dragging = index
                self._selected_action = index
                self.action_selected.emit(index)
                self.update()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._dragging < 0:
            return
        self._last_fraction = self._fraction_at(event.position())
        self.action_moved.emit(self._dragging, *self._last_fraction)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._dragging < 0:
            return
        index = self._dragging
        self._dragging = -1
        self._last_fraction = self._fraction_at(event.position())
        self.action_committed.emit(index, *self._last_fraction)
        self.update()
