import math
import unittest
from logolab import graphics
from logolab.graphics import (
	TurtleGraphics, RecordingSurface, Line, Circle, Arc, FillPath,
	WRAP, WINDOW, FENCE, resolve_color, outline,
)

def fresh(mode=WRAP, size=(800, 600)):
	g = TurtleGraphics(RecordingSurface(*size))
	g.set_mode(mode)
	return g

class MotionTests(unittest.TestCase):

	def test_heading_zero_is_up_and_turns_are_clockwise(self):
		g = fresh(WINDOW)
		g.forward(100)
		self.assertAlmostEqual(0, g.x)
		self.assertAlmostEqual(100, g.y)
		g.right(90)
		g.forward(50)
		self.assertAlmostEqual(50, g.x)
		g.left(450)
		self.assertEqual(0, g.heading)

	def test_home(self):
		g = fresh(WINDOW)
		g.forward(30)
		g.right(30)
		g.home()
		self.assertEqual((0, 0, 0), (g.x, g.y, g.heading))
		self.assertEqual(2, len(g.log))

	def test_pen_up_draws_nothing(self):
		g = fresh(WINDOW)
		g.pen_up()
		g.forward(100)
		g.circle(20)
		g.arc(90, 20)
		self.assertEqual([], g.log)

class EdgeTests(unittest.TestCase):

	def test_window_lets_the_turtle_roam(self):
		g = fresh(WINDOW)
		g.forward(350)
		self.assertEqual(350, g.y)
		self.assertEqual([Line(0, 0, 0, 350, "#000000", 1, graphics.PAINT)], g.log)

	def test_fence_stops_at_the_edge(self):
		g = fresh(FENCE)
		g.forward(350)
		self.assertEqual(300, g.y)
		self.assertEqual(1, len(g.log))
		self.assertEqual(300, g.log[0].y2)
		g.set_position(-1000, 1000)
		self.assertEqual((-400, 300), (g.x, g.y))

	def test_wrap_comes_back_on_the_other_side(self):
		g = fresh(WRAP)
		g.forward(350)
		self.assertAlmostEqual(-250, g.y)
		self.assertEqual(35, len(g.log))

	def test_wrap_never_draws_across_the_canvas(self):
		g = fresh(WRAP)
		g.right(30)
		g.forward(2000)
		for line in g.log:
			self.assertLessEqual(math.hypot(line.x2 - line.x1, line.y2 - line.y1), graphics.WRAP_STEP + 1e-9)
			self.assertLessEqual(abs(line.x1), 400 + 1e-9)
			self.assertLessEqual(abs(line.y1), 300 + 1e-9)
		self.assertLessEqual(abs(g.x), 400)
		self.assertLessEqual(abs(g.y), 300)

	def test_zoom_shrinks_the_fence(self):
		g = fresh(FENCE)
		g.zoom_in()
		g.forward(1000)
		self.assertAlmostEqual(250, g.y)

class CircleAndArcTests(unittest.TestCase):

	def test_circle_stays_put(self):
		g = fresh()
		g.forward(10)
		g.log.clear()
		g.circle(30)
		self.assertEqual([Circle(0, 10, 30, "#000000", 1, graphics.PAINT)], g.log)
		self.assertAlmostEqual(10, g.y)

	def test_arc_moves_the_turtle_along_the_circle(self):
		g = fresh()
		g.arc(90, 50)
		self.assertAlmostEqual(50, g.x)
		self.assertAlmostEqual(50, g.y)
		self.assertEqual(90, g.heading)
		arc = g.log[0]
		self.assertIsInstance(arc, Arc)
		self.assertAlmostEqual(50, arc.x)
		self.assertAlmostEqual(0, arc.y)
		self.assertEqual(90, arc.sweep)

	def test_a_negative_arc_retraces_a_positive_one(self):
		g = fresh()
		g.arc(180, 50)
		self.assertAlmostEqual(100, g.x)
		self.assertAlmostEqual(0, g.y)
		self.assertEqual(180, g.heading)
		g.arc(-180, 50)
		self.assertAlmostEqual(0, g.x)
		self.assertAlmostEqual(0, g.y)
		self.assertEqual(0, g.heading)

	def test_negative_radius_curves_the_other_way(self):
		g = fresh()
		g.arc(90, -50)
		self.assertAlmostEqual(-50, g.x)
		self.assertAlmostEqual(50, g.y)
		self.assertEqual(270, g.heading)
		g.arc(-90, -50)
		self.assertAlmostEqual(0, g.x)
		self.assertAlmostEqual(0, g.y)

class FillTests(unittest.TestCase):

	def test_fill_uses_the_colour_it_started_with(self):
		g = fresh(WINDOW)
		g.set_pen_color("red")
		g.begin_fill()
		g.forward(10)
		g.set_pen_color("blue")
		g.right(90)
		g.forward(10)
		g.end_fill()
		fill = g.log[-1]
		self.assertEqual(FillPath(0, 0, tuple(g.log[:2]), "red"), fill)

	def test_nested_fills(self):
		g = fresh(WINDOW)
		g.begin_fill()
		g.forward(10)
		g.begin_fill()
		g.circle(5)
		g.end_fill()
		g.end_fill()
		inner, outer = g.log[2], g.log[3]
		self.assertEqual(1, len(inner.parts))
		self.assertEqual(3, len(outer.parts))
		self.assertIs(inner, outer.parts[-1])

	def test_outline_starts_at_the_start(self):
		g = fresh(WINDOW)
		g.begin_fill()
		g.forward(10)
		g.end_fill()
		points = outline(g.log[-1])
		self.assertEqual([(0, 0), (0, 0), (0, 10)], points)

	def test_end_fill_without_begin_does_nothing(self):
		g = fresh()
		g.end_fill()
		self.assertEqual([], g.log)

class TurtleTests(unittest.TestCase):

	def test_tell_creates_turtles(self):
		g = fresh()
		g.tell(3)
		self.assertEqual(3, g.current_id)
		self.assertEqual([0, 3], g.turtle_ids())
		g.tell([5, 6])
		self.assertEqual(5, g.current_id)

	def test_clear_screen_resets_every_turtle(self):
		g = fresh()
		g.forward(10)
		g.tell(1)
		g.set_pen_color("red")
		g.right(90)
		g.clear_screen()
		self.assertEqual([], g.log)
		for t in g.turtles.values():
			self.assertEqual((0, 0, 0, "#000000"), (t.x, t.y, t.heading, t.pen_color))

	def test_clean_keeps_the_turtles(self):
		g = fresh(WINDOW)
		g.forward(10)
		g.clean()
		self.assertEqual([], g.log)
		self.assertEqual(10, g.y)

	def test_pen_size_is_at_least_one(self):
		g = fresh()
		g.set_pen_size(0)
		self.assertEqual(1, g.pen_size)

class ColorTests(unittest.TestCase):

	def test_resolve_color(self):
		for given, expect in [
			("red", "rgb(255, 0, 0)"),
			("Red", "rgb(255, 0, 0)"),
			([1, 2, 3], "rgb(1, 2, 3)"),
			([1, 2, 3, 4], "rgb(1, 2, 3)"),
			("#abcdef", "#abcdef"),
			(5, "black"),
			([1, 2], "black"),
		]:
			with self.subTest(given):
				self.assertEqual(expect, resolve_color(given))

class ViewTests(unittest.TestCase):

	def test_coordinates_at(self):
		g = fresh()
		self.assertEqual((0, 0), g.coordinates_at(400, 300))
		self.assertEqual((100, 100), g.coordinates_at(500, 200))
		g.pan(10, 0)
		self.assertEqual((-10, 0), g.coordinates_at(400, 300))
		g.reset_view()
		g.zoom_in()
		self.assertEqual((83, 0), g.coordinates_at(500, 300))

	def test_zoom_is_clamped(self):
		g = fresh()
		for _ in range(20): g.zoom_in()
		self.assertEqual(graphics.MAX_ZOOM, g.view.zoom)
		for _ in range(40): g.zoom_out()
		self.assertEqual(graphics.MIN_ZOOM, g.view.zoom)

	def test_view_changes_leave_the_drawing_alone(self):
		g = fresh()
		g.forward(10)
		log = list(g.log)
		g.zoom_in()
		g.pan(5, 5)
		g.reset_view()
		self.assertEqual(log, g.log)
		self.assertEqual(1, g.view.zoom)

class RenderTests(unittest.TestCase):

	def test_redraw_clears_replays_and_shows_turtles(self):
		g = fresh(WINDOW)
		g.forward(100)
		g.redraw()
		calls = g.surface.calls
		self.assertEqual(("clear", "#ffffff"), calls[0])
		self.assertEqual(("line", 400, 300, 400, 200, "#000000", 1, graphics.PAINT), calls[1])
		self.assertEqual("turtle", calls[2][0])
		self.assertFalse(g.dirty)

	def test_hidden_turtles_are_not_drawn(self):
		g = fresh()
		g.hide_turtle()
		g.redraw()
		self.assertEqual(0, g.surface.count("turtle"))

	def test_erasing_draws_in_the_background_colour(self):
		g = fresh(WINDOW)
		g.set_background("yellow")
		g.pen_erase()
		g.forward(10)
		g.redraw()
		line = [c for c in g.surface.calls if c[0] == "line"][0]
		self.assertEqual("yellow", line[5])

	def test_zoom_scales_widths_and_positions(self):
		g = fresh(WINDOW)
		g.set_pen_size(2)
		g.forward(100)
		g.zoom_in()
		line = [c for c in g.surface.calls if c[0] == "line"][0]
		self.assertAlmostEqual(300 - 120, line[4])
		self.assertAlmostEqual(2.4, line[6])

	def test_fills_and_arcs_reach_the_surface(self):
		g = fresh(WINDOW)
		g.begin_fill()
		g.circle(10)
		g.arc(90, 10)
		g.end_fill()
		g.redraw()
		self.assertEqual(2, g.surface.count("arc"))
		self.assertEqual(1, g.surface.count("fill"))

	def test_export_leaves_the_turtles_out_of_the_picture(self):
		g = fresh(WINDOW)
		g.forward(10)
		g.tell(1)
		g.hide_turtle()
		g.tell(2)
		g.export("picture.png")
		[(path, picture)] = g.surface.saved
		self.assertEqual("picture.png", path)
		self.assertEqual(1, sum(1 for c in picture if c[0] == "line"))
		self.assertFalse([c for c in picture if c[0] == "turtle"])
		self.assertTrue(g.turtles[0].visible)
		self.assertFalse(g.turtles[1].visible)
		self.assertEqual(2, g.surface.count("turtle"))

	def test_plain_surfaces_cannot_save(self):
		class Blank(graphics.Surface):
			def size(self): return 10, 10
			def clear(self, color): pass
			def draw_line(self, *args): pass
			def draw_arc(self, *args): pass
			def fill_path(self, points, color): pass
		g = TurtleGraphics(Blank())
		with self.assertRaises(NotImplementedError):
			g.export("picture.png")
		self.assertTrue(g.current.visible)

	def test_moves_mark_the_drawing_dirty(self):
		g = fresh()
		g.redraw()
		g.pen_up()
		g.forward(5)
		self.assertTrue(g.dirty)

if __name__ == '__main__':
	unittest.main()
