from payledger.cli import app

app(prog_name="payledger")
