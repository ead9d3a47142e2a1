from easyfocus.launcher import run

run()
