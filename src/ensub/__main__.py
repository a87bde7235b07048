from ensub.cli.app import app

app()
