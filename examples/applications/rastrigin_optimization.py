from whaleopt import Whaleopt
from whaleopt.functions.benchmark import rastrigin
from whaleopt.visualization import convergence

# Bundles the task into Whaleopt class (seeded for experimental consistency)
opt = Whaleopt(n_variables=5, n_agents=30, bounds=(-5.12, 5.12), direction="minimize",
               n_iterations=200, function=rastrigin, seed=0)

# Runs the optimization task
history = opt.run()

# Prints out information about the best solution found
position, fitness = history[-1]
print(f"Best Position: {position[:3]}... | Fitness: {fitness:.6e}")

# Writes the convergence curve to an image
_, fitnesses = history.get_convergence("best_agent")
convergence.plot(fitnesses, labels=["rastrigin"], title="WOA convergence",
                 ylabel="fitness", file_path="rastrigin_convergence.png")
