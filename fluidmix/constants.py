# universal gas constant [J/(mol K)]
universal_gas_constant = 8.3145

# maximum number of species in a mixture
ARRAYSIZE = 16
