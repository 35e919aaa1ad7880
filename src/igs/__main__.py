from igs.cli import app

app(prog_name="igs")
