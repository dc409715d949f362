# Secret generation must draw from the OS CSPRNG (PEP 506)
from secrets import SystemRandom

random = SystemRandom()
