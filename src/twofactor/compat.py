from random import SystemRandom

# os.urandom backed; shared module-wide, safe to call from any thread
random = SystemRandom()
