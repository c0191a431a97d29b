from builder.main import run

run()
