from postboard.main import run

run()
