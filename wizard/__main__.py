from wizard.cli.main import app

app(prog_name='wizard')
