from whaleopt import Whaleopt
from whaleopt.functions.scheduling import MakespanFunction
from whaleopt.problems import JSSPInstance

# Loads a bundled instance (use JSSPInstance.from_file for your own)
instance = JSSPInstance.from_instance("test03")
function = MakespanFunction(instance)

# Every operation gets one random key within [0, 1]
opt = Whaleopt(n_variables=function.n_variables, n_agents=20, bounds=(0.0, 1.0),
               direction="minimize", n_iterations=100, function=function, seed=0)

history = opt.run()

# Decodes the best whale back into an operation order
schedule = function.decode(opt.best_whale.position)
print(f"Makespan: {history[-1][1]:.0f} | Schedule: {schedule}")
