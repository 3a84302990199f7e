"""
The turtle model: where each turtle is, which way it faces, what its pen is doing,
and the log of everything drawn so far.

The log is the drawing. Whatever surface the host provides is just a place to
replay it: `redraw` clears the surface, replays the log, and puts the visible
turtles on top. Logical coordinates have the origin in the middle and y pointing
up; headings are degrees clockwise from straight up.

Motion off the edge of the visible area follows one of three policies:
	wrap:   come back in on the opposite edge,
	fence:  stop at the edge,
	window: keep going.
"""
import abc
import math
from threading import RLock
from typing import NamedTuple, Optional, Union
from .values import format_value

WRAP, WINDOW, FENCE = "wrap", "window", "fence"
PAINT, ERASE = "paint", "erase"

DEFAULT_PEN = "#000000"
DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_SIZE = (800, 600)
TURTLE_SIZE = 15

WRAP_STEP = 10       # Longest sub-segment of a wrapped move, in logical units.
MAX_WRAP_STEPS = 10000
ARC_STEP = 5         # Degrees between sample points when an arc becomes part of a polygon.
MIN_ZOOM, MAX_ZOOM, ZOOM_FACTOR = 0.25, 4, 1.2

COLORS = {
	'black': (0, 0, 0),
	'white': (255, 255, 255),
	'red': (255, 0, 0),
	'green': (0, 128, 0),
	'blue': (0, 0, 255),
	'yellow': (255, 255, 0),
	'cyan': (0, 255, 255),
	'magenta': (255, 0, 255),
	'orange': (255, 165, 0),
	'purple': (128, 0, 128),
	'pink': (255, 192, 203),
	'brown': (139, 69, 19),
	'gray': (128, 128, 128),
	'grey': (128, 128, 128),
	'lime': (0, 255, 0),
	'navy': (0, 0, 128),
	'teal': (0, 128, 128),
	'maroon': (128, 0, 0),
	'olive': (128, 128, 0),
	'aqua': (0, 255, 255),
	'silver': (192, 192, 192),
	'gold': (255, 215, 0),
	'violet': (238, 130, 238),
	'indigo': (75, 0, 130),
	'coral': (255, 127, 80),
	'turquoise': (64, 224, 208),
}

def _rgb(r, g, b) -> str:
	return "rgb(%s, %s, %s)"%(r, g, b)

def resolve_color(value) -> str:
	"""
	A list of three numbers is red-green-blue; a known name means that colour;
	any other word is passed along for the surface to make sense of.
	"""
	if isinstance(value, list) and len(value) >= 3:
		return _rgb(*map(format_value, value[:3]))
	if isinstance(value, str):
		try: return _rgb(*COLORS[value.lower()])
		except KeyError: return value
	return "black"

def normalize_heading(h:float) -> float:
	h = h % 360
	return 0 if h >= 360 else h  # Float modulo of a tiny negative can land on 360.

def direction(bearing:float) -> tuple[float, float]:
	""" Unit vector for a bearing in degrees, clockwise from up. """
	radians = math.radians(bearing)
	return math.sin(radians), math.cos(radians)

def _wrap(v:float, half:float) -> float:
	if half <= 0 or -half <= v <= half: return v
	return (v + half) % (2 * half) - half

def _clamp(v:float, half:float) -> float:
	return max(-half, min(half, v))

###############################################################################

class Turtle:
	def __init__(self):
		self.reset()

	def reset(self):
		self.x = 0
		self.y = 0
		self.heading = 0
		self.pen_down = True
		self.pen_color = DEFAULT_PEN
		self.pen_size = 1
		self.pen_mode = PAINT
		self.visible = True

	def __repr__(self):
		return "<Turtle at (%g, %g) heading %g>"%(self.x, self.y, self.heading)

class Line(NamedTuple):
	x1: float
	y1: float
	x2: float
	y2: float
	color: str
	width: float
	mode: str

class Circle(NamedTuple):
	""" Signed radius: the sign only says which way round a fill outline goes. """
	x: float
	y: float
	radius: float
	color: str
	width: float
	mode: str

class Arc(NamedTuple):
	""" Centre, radius, starting bearing from the centre, and signed sweep (positive is clockwise). """
	x: float
	y: float
	radius: float
	start: float
	sweep: float
	color: str
	width: float
	mode: str

class FillPath(NamedTuple):
	x: float
	y: float
	parts: tuple
	color: str

PRIMITIVE = Union[Line, Circle, Arc, FillPath]

def arc_points(x, y, radius, start, sweep) -> list[tuple[float, float]]:
	steps = max(1, math.ceil(abs(sweep) / ARC_STEP))
	points = []
	for i in range(steps + 1):
		dx, dy = direction(start + sweep * i / steps)
		points.append((x + radius * dx, y + radius * dy))
	return points

def outline(prim:PRIMITIVE) -> list[tuple[float, float]]:
	""" The primitive as a run of points, for building a fill polygon. """
	if isinstance(prim, Line): return [(prim.x1, prim.y1), (prim.x2, prim.y2)]
	if isinstance(prim, Arc): return arc_points(prim.x, prim.y, prim.radius, prim.start, prim.sweep)
	if isinstance(prim, Circle):
		sweep = 360 if prim.radius >= 0 else -360
		return arc_points(prim.x, prim.y, abs(prim.radius), 0, sweep)
	if isinstance(prim, FillPath):
		points = [(prim.x, prim.y)]
		for part in prim.parts: points.extend(outline(part))
		return points
	raise TypeError(prim)

class _FillBuffer:
	def __init__(self, x, y, color):
		self.x, self.y, self.color = x, y, color
		self.parts = []

###############################################################################

class View:
	"""
	Pixel <-> logical conversion: centre offset, pan, and zoom.
	This is view-state only; nothing here touches the drawing.
	"""
	def __init__(self, width:float, height:float):
		self.resize(width, height)
		self.reset()

	def resize(self, width:float, height:float):
		self.center_x = width / 2
		self.center_y = height / 2

	def reset(self):
		self.zoom = 1
		self.pan_x = 0
		self.pan_y = 0

	def to_canvas(self, x:float, y:float) -> tuple[float, float]:
		return self.center_x + (x + self.pan_x) * self.zoom, self.center_y - (y + self.pan_y) * self.zoom

	def to_logical(self, px:float, py:float) -> tuple[float, float]:
		return (px - self.center_x) / self.zoom - self.pan_x, -(py - self.center_y) / self.zoom - self.pan_y

	def zoom_in(self): self.zoom = min(MAX_ZOOM, self.zoom * ZOOM_FACTOR)
	def zoom_out(self): self.zoom = max(MIN_ZOOM, self.zoom / ZOOM_FACTOR)

	def pan(self, dx:float, dy:float):
		self.pan_x += dx
		self.pan_y += dy

class Surface(abc.ABC):
	"""
	What the host must provide: somewhere to put pixels.
	All coordinates arrive in canvas pixels with y pointing down.
	Arc bearings are still degrees clockwise from up.
	"""
	@abc.abstractmethod
	def size(self) -> tuple[int, int]: pass
	@abc.abstractmethod
	def clear(self, color:str): pass
	@abc.abstractmethod
	def draw_line(self, x1, y1, x2, y2, color:str, width:float, mode:str): pass
	@abc.abstractmethod
	def draw_arc(self, x, y, radius, start, sweep, color:str, width:float): pass
	@abc.abstractmethod
	def fill_path(self, points:list, color:str): pass
	def draw_turtle(self, x, y, heading, color:str, size:float): pass
	def save(self, path):
		raise NotImplementedError("%s can't save pictures."%type(self).__name__)

class RecordingSurface(Surface):
	""" A surface that remembers what it was asked to do. Good for tests and headless runs. """
	def __init__(self, width=DEFAULT_SIZE[0], height=DEFAULT_SIZE[1]):
		self.width, self.height = width, height
		self.calls = []
		self.saved = []
	def size(self): return self.width, self.height
	def clear(self, color):
		self.calls.clear()
		self.calls.append(("clear", color))
	def draw_line(self, *args): self.calls.append(("line", *args))
	def draw_arc(self, *args): self.calls.append(("arc", *args))
	def fill_path(self, points, color): self.calls.append(("fill", points, color))
	def draw_turtle(self, *args): self.calls.append(("turtle", *args))
	def save(self, path): self.saved.append((path, list(self.calls)))
	def count(self, kind:str) -> int:
		return sum(1 for c in self.calls if c[0] == kind)

###############################################################################

class TurtleGraphics:
	"""
	Any number of turtles, one of which is current. Commands with no
	explicit turtle go to the current one.
	"""
	surface : Surface
	log : list
	dirty : bool

	def __init__(self, surface:Optional[Surface]=None):
		self.surface = surface or RecordingSurface()
		self._redraw_lock = RLock()
		self.view = View(*self.surface.size())
		self.reset()

	def reset(self):
		""" Back to one turtle, an empty log, a white background, and the default view. """
		self.turtles = {0: Turtle()}
		self.current_id = 0
		self.log = []
		self._fills = []
		self.background = DEFAULT_BACKGROUND
		self.mode = WRAP
		self.view.reset()
		self.redraw()

	# Queries

	@property
	def current(self) -> Turtle: return self.turtles[self.current_id]
	@property
	def x(self): return self.current.x
	@property
	def y(self): return self.current.y
	@property
	def heading(self): return self.current.heading
	@property
	def pen_size(self): return self.current.pen_size
	@property
	def pen_color(self): return self.current.pen_color

	def turtle_ids(self) -> list:
		return list(self.turtles)

	def tell(self, which):
		if isinstance(which, list):
			which = which[0] if which else 0
		if which not in self.turtles:
			self.turtles[which] = Turtle()
		self.current_id = which
		self._touch()

	def half_extents(self) -> tuple[float, float]:
		width, height = self.surface.size()
		return width / (2 * self.view.zoom), height / (2 * self.view.zoom)

	# Motion

	def forward(self, distance:float):
		t = self.current
		dx, dy = direction(t.heading)
		self.move_to(t.x + distance * dx, t.y + distance * dy)

	def back(self, distance:float): self.forward(-distance)
	def left(self, angle:float): self.set_heading(self.current.heading - angle)
	def right(self, angle:float): self.set_heading(self.current.heading + angle)

	def set_heading(self, angle:float):
		self.current.heading = normalize_heading(angle)
		self._touch()

	def home(self):
		self.move_to(0, 0)
		self.set_heading(0)

	def set_position(self, x:float, y:float): self.move_to(x, y)
	def set_x(self, x:float): self.move_to(x, self.current.y)
	def set_y(self, y:float): self.move_to(self.current.x, y)

	def move_to(self, x:float, y:float):
		t = self.current
		if self.mode == WRAP: self._wrap_to(t, x, y)
		elif self.mode == FENCE:
			half_width, half_height = self.half_extents()
			x, y = _clamp(x, half_width), _clamp(y, half_height)
			self._stroke(t, t.x, t.y, x, y)
			t.x, t.y = x, y
		else:
			self._stroke(t, t.x, t.y, x, y)
			t.x, t.y = x, y
		self._touch()

	def _wrap_to(self, t:Turtle, x:float, y:float):
		""" Walk there in short hops, wrapping after each, so a crossing looks continuous. """
		half_width, half_height = self.half_extents()
		dx, dy = x - t.x, y - t.y
		steps = max(1, math.ceil(math.hypot(dx, dy) / WRAP_STEP))
		steps = min(steps, MAX_WRAP_STEPS)
		hop_x, hop_y = dx / steps, dy / steps
		here_x, here_y = t.x, t.y
		for _ in range(steps):
			there_x, there_y = here_x + hop_x, here_y + hop_y
			self._stroke(t, here_x, here_y, there_x, there_y)
			here_x, here_y = _wrap(there_x, half_width), _wrap(there_y, half_height)
		t.x, t.y = _wrap(x, half_width), _wrap(y, half_height)

	def _stroke(self, t:Turtle, x1, y1, x2, y2):
		if t.pen_down:
			self._emit(Line(x1, y1, x2, y2, t.pen_color, t.pen_size, t.pen_mode))

	def circle(self, radius:float):
		""" A circle around the turtle. The turtle stays put. """
		t = self.current
		if t.pen_down and radius:
			self._emit(Circle(t.x, t.y, radius, t.pen_color, t.pen_size, t.pen_mode))
		self._touch()

	def arc(self, angle:float, radius:float):
		"""
		Carry the turtle forward along a circle whose centre is `radius` to its
		right, turning clockwise; a negative radius puts the centre on the left
		and turns the other way. A negative angle retraces the same circle backward.
		"""
		t = self.current
		sense = 1 if radius >= 0 else -1
		size = abs(radius)
		rx, ry = direction(t.heading + 90 * sense)
		cx, cy = t.x + size * rx, t.y + size * ry
		start = t.heading - 90 * sense
		sweep = angle * sense
		ex, ey = direction(start + sweep)
		if t.pen_down and angle and radius:
			self._emit(Arc(cx, cy, size, normalize_heading(start), sweep, t.pen_color, t.pen_size, t.pen_mode))
		t.x, t.y = cx + size * ex, cy + size * ey
		t.heading = normalize_heading(t.heading + sweep)
		self._touch()

	# Fills

	def begin_fill(self):
		t = self.current
		self._fills.append(_FillBuffer(t.x, t.y, t.pen_color))

	def end_fill(self):
		if self._fills:
			buffer = self._fills.pop()
			self._emit(FillPath(buffer.x, buffer.y, tuple(buffer.parts), buffer.color))

	def cancel_fill(self):
		if self._fills: self._fills.pop()

	def _emit(self, prim:PRIMITIVE):
		self.log.append(prim)
		for buffer in self._fills: buffer.parts.append(prim)
		self.dirty = True

	# Pen and screen

	def pen_up(self): self.current.pen_down = False
	def pen_down(self): self.current.pen_down = True
	def set_pen_color(self, color:str): self.current.pen_color = color
	def set_pen_size(self, size:float): self.current.pen_size = max(1, size)
	def pen_erase(self): self.current.pen_mode = ERASE
	def pen_paint(self): self.current.pen_mode = PAINT

	def set_background(self, color:str):
		self.background = color
		self.redraw()

	def set_mode(self, mode:str):
		assert mode in (WRAP, WINDOW, FENCE), mode
		self.mode = mode

	def hide_turtle(self):
		self.current.visible = False
		self._touch()

	def show_turtle(self):
		self.current.visible = True
		self._touch()

	def clear_screen(self):
		""" Every turtle goes home with a fresh pen, and the drawing is gone. """
		for t in self.turtles.values(): t.reset()
		self.log = []
		self._fills = []
		self.redraw()

	def clean(self):
		""" Erase the drawing but leave the turtles where they are. """
		self.log = []
		self.redraw()

	# View

	def zoom_in(self):
		self.view.zoom_in()
		self.redraw()

	def zoom_out(self):
		self.view.zoom_out()
		self.redraw()

	def pan(self, dx:float, dy:float):
		self.view.pan(dx, dy)
		self.redraw()

	def reset_view(self):
		self.view.reset()
		self.redraw()

	def coordinates_at(self, px:float, py:float) -> tuple[int, int]:
		self.view.resize(*self.surface.size())
		x, y = self.view.to_logical(px, py)
		return round(x), round(y)

	# Rendering

	def _touch(self): self.dirty = True

	def redraw(self):
		""" The host and the running program may both ask for this, from different threads. """
		with self._redraw_lock:
			self.dirty = False
			surface, view = self.surface, self.view
			view.resize(*surface.size())
			surface.clear(self.background)
			for prim in list(self.log):
				RENDER[type(prim)](self, prim)
			for t in list(self.turtles.values()):
				if t.visible:
					x, y = view.to_canvas(t.x, t.y)
					surface.draw_turtle(x, y, t.heading, t.pen_color, TURTLE_SIZE * view.zoom)

	@property
	def lock(self) -> RLock:
		""" Hold this while reading the surface's pixels from another thread. """
		return self._redraw_lock

	def export(self, path):
		""" Save the picture as it stands, without the turtles drawn on it. """
		with self._redraw_lock:
			shown = [t for t in self.turtles.values() if t.visible]
			for t in shown: t.visible = False
			try:
				self.redraw()
				self.surface.save(path)
			finally:
				for t in shown: t.visible = True
				self.redraw()

	def _ink(self, prim) -> str:
		return self.background if prim.mode == ERASE else prim.color

	def _render_line(self, prim:Line):
		x1, y1 = self.view.to_canvas(prim.x1, prim.y1)
		x2, y2 = self.view.to_canvas(prim.x2, prim.y2)
		self.surface.draw_line(x1, y1, x2, y2, self._ink(prim), prim.width * self.view.zoom, prim.mode)

	def _render_circle(self, prim:Circle):
		x, y = self.view.to_canvas(prim.x, prim.y)
		zoom = self.view.zoom
		self.surface.draw_arc(x, y, abs(prim.radius) * zoom, 0, 360, self._ink(prim), prim.width * zoom)

	def _render_arc(self, prim:Arc):
		x, y = self.view.to_canvas(prim.x, prim.y)
		zoom = self.view.zoom
		self.surface.draw_arc(x, y, prim.radius * zoom, prim.start, prim.sweep, self._ink(prim), prim.width * zoom)

	def _render_fill(self, prim:FillPath):
		points = [self.view.to_canvas(x, y) for x, y in outline(prim)]
		self.surface.fill_path(points, prim.color)

RENDER = {
	Line: TurtleGraphics._render_line,
	Circle: TurtleGraphics._render_circle,
	Arc: TurtleGraphics._render_arc,
	FillPath: TurtleGraphics._render_fill,
}
