from mini_social.main import run

run()
