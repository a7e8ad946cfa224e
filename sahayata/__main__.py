from sahayata.main import run

run()
