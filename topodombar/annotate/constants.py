PASS_FILENAME = 'topodombar.annotated.tab'
"""name of the annotated CNV output file written to the output directory"""
