"""baleen: spatial agent-based modelling of whales foraging over a water/land grid."""
