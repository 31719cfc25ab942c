from dockctl.cli import app

app(prog_name="dockctl")
