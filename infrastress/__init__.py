# Regional infrastructure stress engine
#
# Projects energy, water and agriculture stress for a set of regions from
# historical daily records and scenario parameters, then prices the result.
