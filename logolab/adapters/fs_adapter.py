"""
Project files on disk.

A saved project is a small JSON envelope: {name, code, created, version}.
Anything else is taken to be Logo source as it stands.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple, Optional

FORMAT_VERSION = "1.0"

class Project(NamedTuple):
	name: str
	code: str
	created: Optional[str] = None
	version: Optional[str] = None

def parse_project(text:str, default_name:str="untitled") -> Project:
	try: envelope = json.loads(text)
	except ValueError: envelope = None
	if isinstance(envelope, dict) and isinstance(envelope.get("code"), str):
		return Project(
			str(envelope.get("name") or default_name),
			envelope["code"],
			envelope.get("created"),
			envelope.get("version"),
		)
	return Project(default_name, text)

def read_project(path) -> Project:
	path = Path(path)
	with open(path, "r", encoding="utf-8") as fh: text = fh.read()
	return parse_project(text, path.stem)

def write_project(path, name:str, code:str) -> Project:
	project = Project(name, code, datetime.now(timezone.utc).isoformat(), FORMAT_VERSION)
	with open(path, "w", encoding="utf-8") as fh:
		json.dump(project._asdict(), fh, indent=2)
	return project
