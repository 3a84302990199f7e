"""
This is LogoLab, a turtle-graphics Logo for people learning to program.

{0}

For example:

    logolab square.logo

draws whatever square.logo says to draw, in a window.

    logolab --headless square.logo

runs it without a window and says how much got drawn.

    logolab --headless --save square.png square.logo

runs it without a window and saves the picture.

    logolab -h

will explain all the arguments.
"""
import sys, argparse

MODES = ("wrap", "window", "fence")

def _size(text:str):
	try:
		width, height = map(int, text.lower().split("x"))
	except ValueError:
		raise argparse.ArgumentTypeError("size should look like 800x600") from None
	if width < 1 or height < 1:
		raise argparse.ArgumentTypeError("size should look like 800x600")
	return width, height

parser = argparse.ArgumentParser(
	prog="logolab",
	description="Turtle-graphics Logo interpreter.",
)
parser.add_argument("program", help="a Logo source file, or a saved project.")
parser.add_argument('-s', "--speed", type=int, default=0, help="Milliseconds to pause after each command, so you can watch. Default 0.")
parser.add_argument("--size", type=_size, default=(800, 600), help="Canvas size in pixels, like 800x600.")
parser.add_argument('-m', "--mode", choices=MODES, default="wrap", help="What happens at the edge of the canvas. Default wrap.")
parser.add_argument("--headless", action="store_true", help="Run without opening a window.")
parser.add_argument("--save", metavar="PICTURE", help="Save the finished drawing to this image file, like square.png.")
parser.add_argument("--save-project", metavar="PROJECT", help="Also save the program as a project file, like square.json.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on.")

def run(args):
	from .diagnostics import Report
	from .adapters.fs_adapter import read_project
	from .adapters.teletype_adapter import Console
	from .executive import Interpreter
	from .graphics import TurtleGraphics, RecordingSurface
	report = Report(verbose=args.verbose)
	try: project = read_project(args.program)
	except OSError as e:
		report.issue("I couldn't read %s: %s"%(args.program, e.strerror or e))
		report.complain_to_console()
		return 1
	report.info("Project:", project.name)
	if args.save_project:
		from .adapters.fs_adapter import write_project
		try: write_project(args.save_project, project.name, project.code)
		except OSError as e: report.issue("I couldn't save the project to %s: %s"%(args.save_project, e.strerror or e))
		else: report.info("Saved the project to", args.save_project)
	console = Console()
	def on_error(message):
		report.issue(message)
		report.complain_to_console()
		report.reset()
	if not args.headless:
		from .adapters.pygame_adapter import Window
		window = Window(args.size, picture=args.save)
		surface = window.surface
	elif args.save:
		from .adapters.pygame_adapter import PygameSurface
		surface, window = PygameSurface(args.size), None
	else:
		surface, window = RecordingSurface(*args.size), None
	interpreter = console.hook_up(Interpreter(TurtleGraphics(surface)))
	interpreter.on_error = on_error
	interpreter.execution_speed = args.speed
	interpreter.graphics.set_mode(args.mode)
	if window is None:
		ok = interpreter.execute(project.code)
		report.info("Drew %d things."%len(interpreter.graphics.log))
		if args.save:
			try: interpreter.graphics.export(args.save)
			except OSError as e:
				report.issue("I couldn't save the picture to %s: %s"%(args.save, e.strerror or e))
			else: report.info("Saved the picture to", args.save)
	else:
		ok = window.play(interpreter, project.code)
	if report.sick():
		report.complain_to_console()
		return 1
	return 0 if ok else 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
