from xctl.cmd.cli import app

app(prog_name="xctl")
