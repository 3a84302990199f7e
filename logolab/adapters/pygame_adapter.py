"""
Put the turtle's drawing on screen with pygame.

The display and its event loop keep to the main thread. The Logo program runs
on a worker thread (see scheduler.run_in_background) and only ever appends to
the drawing log; this loop notices the log has changed and replays it.

While the window is open:
	mouse wheel, + and -    zoom
	arrow keys              pan
	0                       reset the view
	S                       save the picture
	Escape                  stop the program
The window title shows the logical coordinates under the mouse.
"""
import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import re
import math
import pygame
from pygame import draw
from typing import Optional

from ..graphics import Surface, TurtleGraphics, direction, DEFAULT_SIZE
from ..scheduler import run_in_background

TITLE = "LogoLab"
PAN_STEP = 20
DEFAULT_PICTURE = "drawing.png"
FALLBACK = pygame.Color(0, 0, 0)

_RGB = re.compile(r"rgba?\(\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)")

def _channel(text:str) -> int:
	return max(0, min(255, int(float(text))))

def parse_color(color) -> pygame.Color:
	""" Understands "#rrggbb", "rgb(r, g, b)", and the names pygame knows. Anything else is black. """
	if isinstance(color, str):
		match = _RGB.match(color.strip())
		if match: return pygame.Color(*map(_channel, match.groups()))
		try: return pygame.Color(color.strip().lower())
		except ValueError: pass
	return FALLBACK

def _canvas_point(x, y, radius, bearing):
	dx, dy = direction(bearing)
	return x + radius * dx, y - radius * dy

class PygameSurface(Surface):
	"""
	Draws into an off-screen buffer, which the display loop copies to the window.
	pygame wants whole-pixel widths, so widths are rounded and never less than one.
	"""
	def __init__(self, size=DEFAULT_SIZE):
		self._canvas = pygame.Surface(size)

	def size(self): return self._canvas.get_size()

	def clear(self, color:str):
		self._canvas.fill(parse_color(color))

	def draw_line(self, x1, y1, x2, y2, color:str, width:float, mode:str):
		draw.line(self._canvas, parse_color(color), (x1, y1), (x2, y2), _width(width))

	def draw_arc(self, x, y, radius, start, sweep, color:str, width:float):
		steps = max(2, math.ceil(abs(sweep) / 3))
		points = [_canvas_point(x, y, radius, start + sweep * i / steps) for i in range(steps + 1)]
		draw.lines(self._canvas, parse_color(color), False, points, _width(width))

	def fill_path(self, points:list, color:str):
		if len(points) >= 3:
			draw.polygon(self._canvas, parse_color(color), points)

	def draw_turtle(self, x, y, heading, color:str, size:float):
		nose = _canvas_point(x, y, size, heading)
		left = _canvas_point(x, y, size / 2, heading - 140)
		right = _canvas_point(x, y, size / 2, heading + 140)
		draw.polygon(self._canvas, parse_color(color), (nose, left, right), 1)

	def blit_to(self, display):
		display.blit(self._canvas, (0, 0))

	def save(self, path):
		""" The file's extension picks the format: .png, .bmp, .jpg, or .tga. """
		try: pygame.image.save(self._canvas, str(path))
		except pygame.error as e: raise OSError(str(e)) from None

def _width(width:float) -> int:
	return max(1, round(width))

def present(graphics:TurtleGraphics, surface:PygameSurface, display):
	""" Bring the canvas up to date and copy it out, without the program drawing halfway through. """
	with graphics.lock:
		if graphics.dirty: graphics.redraw()
		surface.blit_to(display)

class Window:
	"""
	Owns the pygame display. Build it before the interpreter so the
	interpreter's graphics can draw on `surface`.
	"""
	def __init__(self, size=DEFAULT_SIZE, fps:int=30, picture:Optional[str]=None):
		pygame.init()
		pygame.display.set_caption(TITLE)
		self.display = pygame.display.set_mode(size)
		self.surface = PygameSurface(size)
		self.fps = fps
		self.picture = picture
		self.finished = False
		self.ok : Optional[bool] = None

	def play(self, interpreter, code:str) -> bool:
		"""
		Run the program on a worker thread and keep the window alive until
		the user closes it. If there is a picture to save, it is saved once
		the program finishes. Answers whether the program went well.
		"""
		graphics = interpreter.graphics
		def finish(ok):
			self.ok = ok
			self.finished = True
		run_in_background(interpreter, code, finish)
		clock = pygame.time.Clock()
		announced = False
		try:
			while True:
				if self.finished and not announced:
					pygame.display.set_caption(TITLE + (" - done" if self.ok else " - stopped"))
					announced = True
					if self.picture: self.save(graphics)
				for event in pygame.event.get():
					if event.type == pygame.QUIT:
						interpreter.stop()
						return bool(self.ok)
					elif event.type == pygame.MOUSEMOTION:
						x, y = graphics.coordinates_at(*event.pos)
						pygame.display.set_caption("%s (%d, %d)"%(TITLE, x, y))
					elif event.type == pygame.MOUSEWHEEL:
						if event.y > 0: graphics.zoom_in()
						elif event.y < 0: graphics.zoom_out()
					elif event.type == pygame.KEYDOWN:
						self._key(event, interpreter, graphics)
				present(graphics, self.surface, self.display)
				pygame.display.flip()
				clock.tick(self.fps)
		finally:
			pygame.quit()

	def save(self, graphics:TurtleGraphics):
		path = self.picture or DEFAULT_PICTURE
		try: graphics.export(path)
		except OSError as e: pygame.display.set_caption("%s - could not save %s: %s"%(TITLE, path, e))
		else: pygame.display.set_caption("%s - saved %s"%(TITLE, path))

	def _key(self, event, interpreter, graphics:TurtleGraphics):
		key = event.key
		if key == pygame.K_ESCAPE: interpreter.stop()
		elif event.unicode in ("s", "S"): self.save(graphics)
		elif event.unicode in ("+", "="): graphics.zoom_in()
		elif event.unicode == "-": graphics.zoom_out()
		elif event.unicode == "0": graphics.reset_view()
		elif key == pygame.K_LEFT: graphics.pan(PAN_STEP, 0)
		elif key == pygame.K_RIGHT: graphics.pan(-PAN_STEP, 0)
		elif key == pygame.K_UP: graphics.pan(0, -PAN_STEP)
		elif key == pygame.K_DOWN: graphics.pan(0, PAN_STEP)
