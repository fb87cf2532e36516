from city_explorer.main import run

run()
