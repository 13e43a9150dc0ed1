"""Board rendering and mouse input on a QGraphicsScene."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import FILES, Square, col_of, row_of
from gambit.ui.theme import BoardTheme

DestinationProvider = Callable[[Square], list[Square]]


class PieceItem(QGraphicsSimpleTextItem):
    """A single piece glyph on the board.

    Remembers the *square* it stands on and can be dragged.
    """

    def __init__(self, piece: Piece, square: Square, tile_size: int, theme: BoardTheme) -> None:
        super().__init__(piece.symbol)
        self.piece = piece
        self.square = square
        self._drag_origin: QPointF | None = None

        self.setFont(QFont("DejaVu Sans", int(tile_size * 0.7)))
        fill = theme.white_piece if piece.color == Color.WHITE else theme.black_piece
        outline = theme.black_piece if piece.color == Color.WHITE else theme.white_piece
        self.setBrush(QBrush(fill))
        self.setPen(QPen(outline, 1.0))
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setZValue(1)

    def centre_on(self, x: float, y: float, tile_size: int) -> None:
        """Place the glyph centred in the tile whose top-left is (x, y)."""
        bounds = self.boundingRect()
        self.setPos(
            x + (tile_size - bounds.width()) / 2,
            y + (tile_size - bounds.height()) / 2,
        )

    def start_drag(self) -> None:
        self._drag_origin = self.pos()
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, True)
        self.setZValue(10)
        self.setOpacity(0.85)

    def cancel_drag(self) -> None:
        """Snap back to the original position."""
        if self._drag_origin is not None:
            self.setPos(self._drag_origin)
        self._drag_origin = None
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, False)
        self.setZValue(1)
        self.setOpacity(1.0)


class BoardScene(QGraphicsScene):
    """Squares, edge labels, overlays and piece glyphs for one board.

    The scene never decides legality. It reports drag/click gestures as
    ``move_requested(from_sq, to_sq)`` and shows whatever destinations the
    provider returns for the picked-up piece.

    Signals:
        move_requested(int, int): origin and destination squares.
    """

    move_requested = pyqtSignal(int, int)

    def __init__(self, tile_size: int = 80, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.tile = tile_size
        self._theme = BoardTheme.default()
        self._board: Board | None = None
        self._side_to_move = Color.WHITE
        self._flipped = False
        self._destination_provider: DestinationProvider | None = None

        # Interaction state
        self._selected_sq: Square | None = None
        self._destinations: list[Square] = []
        self._dragging_item: PieceItem | None = None
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._selection_items: list[QGraphicsRectItem] = []
        self._destination_items: list[QGraphicsRectItem] = []
        self._last_move_items: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, PieceItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_position(self, board: Board, side_to_move: Color) -> None:
        """Show *board* with *side_to_move* allowed to pick up pieces."""
        self._board = board
        self._side_to_move = side_to_move
        self._clear_selection()
        self._sync_pieces()

    def set_destination_provider(self, provider: DestinationProvider | None) -> None:
        self._destination_provider = provider

    def set_interactive(self, interactive: bool) -> None:
        """Allow or block picking up pieces."""
        self._interactive = interactive
        if not interactive:
            self._clear_selection()

    def set_flipped(self, flipped: bool) -> None:
        self._flipped = flipped
        self._draw_board()
        self._sync_pieces()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_show_coordinates(self, visible: bool) -> None:
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._destination_items)

    @property
    def selected_square(self) -> Square | None:
        """Square of the piece currently picked up, if any."""
        return self._selected_sq

    @property
    def destinations(self) -> list[Square]:
        """Destinations currently highlighted for the picked-up piece."""
        return list(self._destinations)

    def highlight_last_move(self, move: Move | None) -> None:
        self._clear_items(self._last_move_items)
        if move is None:
            return
        for sq in (move.from_sq, move.to_sq):
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_items.append(rect)

    def highlight_check(self, king_sq: Square | None) -> None:
        self._clear_items(self._check_items)
        if king_sq is None:
            return
        rect = self._make_highlight(king_sq, self._theme.highlight_check)
        rect.setZValue(0.6)
        self._check_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """(Re)build the squares and edge labels for the current orientation."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.tile
        font = QFont("DejaVu Sans", max(9, t // 8))

        for sq in range(64):
            vc, vr = self._visual_coords(sq)
            is_light = (row_of(sq) + col_of(sq)) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            rect = QGraphicsRectItem(vc * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[sq] = rect

            text_color = self._theme.coord_light if is_light else self._theme.coord_dark
            if vc == 0:
                self._add_coord(str(8 - row_of(sq)), vc * t + 2, vr * t + 1, font, text_color)
            if vr == 7:
                letter = FILES[col_of(sq)]
                self._add_coord(letter, vc * t + t - 12, vr * t + t - 16, font, text_color)

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(self, label: str, x: float, y: float, font: QFont, color) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Pieces ───────────────────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()
        self._dragging_item = None

        if self._board is None:
            return

        t = self.tile
        for sq, piece in self._board.occupied():
            item = PieceItem(piece, sq, t, self._theme)
            vc, vr = self._visual_coords(sq)
            item.centre_on(vc * t, vr * t, t)
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        sq = self._pos_to_square(event.scenePos())
        if sq is None:
            self._clear_selection()
            return super().mousePressEvent(event)

        # Clicking a highlighted target completes a click-click move
        if self._selected_sq is not None and sq in self._destinations:
            from_sq = self._selected_sq
            self._clear_selection()
            self.move_requested.emit(from_sq, sq)
            return

        piece = self._board[sq]
        if piece is not None and piece.color == self._side_to_move:
            self._select_square(sq)
            item = self._piece_items.get(sq)
            if item is not None:
                item.start_drag()
                self._dragging_item = item
        else:
            self._clear_selection()

        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._dragging_item is not None and event is not None:
            item = self._dragging_item
            self._dragging_item = None
            drop_sq = self._pos_to_square(event.scenePos())
            # The controller re-syncs the scene when the move is accepted.
            item.cancel_drag()
            if drop_sq is not None and drop_sq != item.square:
                self._clear_selection()
                self.move_requested.emit(item.square, drop_sq)
                return

        super().mouseReleaseEvent(event)

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Square) -> None:
        self._clear_selection()
        self._selected_sq = sq
        self._selection_items.append(self._make_highlight(sq, self._theme.highlight_from))

        if self._destination_provider is not None:
            self._destinations = self._destination_provider(sq)
        if self._show_legal_moves:
            for to_sq in self._destinations:
                self._destination_items.append(
                    self._make_highlight(to_sq, self._theme.highlight_to)
                )

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._destinations = []
        self._clear_items(self._selection_items)
        self._clear_items(self._destination_items)

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Geometry ─────────────────────────────────────────────────────────

    def _visual_coords(self, sq: Square) -> tuple[int, int]:
        """Board square → visual (column, row); row 0 is the top edge."""
        if self._flipped:
            return 7 - col_of(sq), 7 - row_of(sq)
        return col_of(sq), row_of(sq)

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Board square under a scene point, or ``None`` off the board."""
        t = self.tile
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            col, row = 7 - col, 7 - row
        return row * 8 + col

    def _make_highlight(self, sq: Square, color) -> QGraphicsRectItem:
        """Overlay *sq* with a flat rectangle of *color*."""
        t = self.tile
        vc, vr = self._visual_coords(sq)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
