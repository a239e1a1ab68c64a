from rtk_hook.hook import main

main()
