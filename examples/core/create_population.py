import torch

from whaleopt.core import Function, Population
from whaleopt.utils.constant import Direction

# Seeded stream for experimental consistency
generator = torch.Generator().manual_seed(0)

# Creates 10 whales with 2 decision variables drawn within [0, 1]
pop = Population.random(n_agents=10, n_variables=2, lower_bound=0.0, upper_bound=1.0,
                        generator=generator)

# Evaluates and ranks every whale, best first
pop.evaluate_all(Function(lambda x: (x ** 2).sum()))
pop.sort(Direction.MINIMIZE)

# Prints out some properties
print(f"Population: {pop}")
print(f"Positions shape: {pop.positions.shape}")
print(f"Best whale: {pop.best()}")
