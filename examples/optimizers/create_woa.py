from whaleopt.optimizers.swarm import WOA

# Creates a Whale Optimization Algorithm optimizer
# with a tighter logarithmic spiral (default b=1)
o = WOA(params={"b": 0.5})

# Prints out some properties
print(f"Algorithm: {o.algorithm}")
print(f"Spiral constant: {o.b}")
print(f"Built: {o.built}")
